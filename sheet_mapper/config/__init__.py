from .loader import DEFAULT_CONFIG_PATH, ConfigError, MapperConfig, load_config

__all__ = ["DEFAULT_CONFIG_PATH", "ConfigError", "MapperConfig", "load_config"]

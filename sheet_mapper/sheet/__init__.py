from .reader import SheetHeaderError, SheetRows, UnsupportedSourceError, read_sheet

__all__ = ["SheetHeaderError", "SheetRows", "UnsupportedSourceError", "read_sheet"]

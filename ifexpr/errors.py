"""ifexpr error types with source location info."""

from ifexpr.location import format_location


class IfExprError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        self.location = format_location(line, column)
        if self.location:
            super().__init__(f"{message} at {self.location}")
        else:
            super().__init__(message)


class ParseError(IfExprError):
    pass


class MacroError(IfExprError):
    """Raised while expanding If-chains; aborts the current file."""
    pass


class BindingError(MacroError):
    pass


class ChainShapeError(MacroError):
    pass


class MacroNotExpandedError(RuntimeError):
    """The ``If`` macro was called at runtime instead of being expanded."""
    pass

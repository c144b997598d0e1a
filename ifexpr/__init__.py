"""ifexpr — expression-valued If-chains, expanded into conditional expressions."""

from ifexpr.transformer import Transformer, transform_source
from ifexpr.errors import (
    IfExprError,
    ParseError,
    MacroError,
    BindingError,
    ChainShapeError,
    MacroNotExpandedError,
)

__all__ = [
    "Transformer", "transform_source",
    "IfExprError", "ParseError", "MacroError", "BindingError",
    "ChainShapeError", "MacroNotExpandedError",
]

"""The ``If`` macro symbol.

Importing it marks a module for expansion::

    from ifexpr.macro import If

    size = If(n > 10).then("big").else_("small").end()

The chain is rewritten to ``'big' if n > 10 else 'small'`` by ``ifexpr``
before the module runs, so ``If`` itself is never meant to be called.
"""

from ifexpr.errors import MacroNotExpandedError


def If(condition):
    raise MacroNotExpandedError(
        "If-chain was not expanded; run this file through ifexpr "
        "(ifexpr build/run) before executing it"
    )


__all__ = ["If"]

"""Entry dispatcher — expand every chain of one entry symbol exactly once."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ifexpr.host import SyntaxHost
from ifexpr.walker import ChainWalker

logger = logging.getLogger(__name__)


def dispatch(host: SyntaxHost, entry_name: str, references: Sequence[Any]) -> int:
    """Expand the chains opened by *references*, given in source order.

    References already swallowed by an enclosing chain are skipped.  Returns
    the number of chains expanded, nested ones included.
    """
    processed: set = set()
    walker = ChainWalker(host, entry_name, processed)
    refs = list(references)

    for i, node in enumerate(refs):
        if node in processed:
            continue
        walker.process_reference(node, refs[i + 1:])

    logger.debug("expanded %d %s-chain(s)", len(processed), entry_name)
    return len(processed)

"""Node references for the client-side comment arena.

A node is either still waiting for the server (``Pending``) or has a
canonical server ID (``Committed``). The two never collide as dict keys.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pending:
    """Optimistically inserted comment, keyed by a client-local ID."""

    temp_id: str


@dataclass(frozen=True)
class Committed:
    """Comment known to the server."""

    comment_id: str


NodeRef = Pending | Committed

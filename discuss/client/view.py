"""Presentation boundary: rebuild the nested tree from the flat arena."""

from dataclasses import dataclass

from .refs import NodeRef, Pending
from .state import CommentNode, ThreadState


@dataclass(frozen=True)
class RenderedComment:
    """A comment ready to display, with its loaded replies nested."""

    node: CommentNode
    replies: tuple["RenderedComment", ...]
    remaining_replies: int  # Replies counted on the server but not loaded
    can_load_more: bool

    @property
    def is_pending(self) -> bool:
        return isinstance(self.node.ref, Pending)


def _render(state: ThreadState, ref: NodeRef) -> RenderedComment | None:
    node = state.nodes.get(ref)
    if node is None:
        return None

    children = state.children.get(ref, ())
    replies = tuple(
        rendered
        for rendered in (_render(state, child) for child in children)
        if rendered is not None
    )
    return RenderedComment(
        node=node,
        replies=replies,
        remaining_replies=max(node.replies_count - len(replies), 0),
        can_load_more=state.replies_has_more.get(ref, False),
    )


def render(state: ThreadState) -> list[RenderedComment]:
    """Build the nested, render-ready tree of loaded comments."""
    return [
        rendered
        for rendered in (_render(state, ref) for ref in state.roots)
        if rendered is not None
    ]

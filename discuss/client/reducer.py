"""Pure reducer over the client thread state.

``apply(state, event)`` never mutates ``state``; it returns a new state
sharing untouched fields. Events that refer to nodes the state no longer
holds are ignored.
"""

from dataclasses import replace
from typing import Iterable, Mapping

from discuss.application.usecase.comment.views import CommentView

from .events import (
    CommentCreated,
    CommentDraft,
    CommentRefreshed,
    Event,
    LikeToggled,
    PageLoaded,
    Phase,
    RepliesLoaded,
)
from .refs import Committed, NodeRef, Pending
from .state import CommentNode, PendingLike, ThreadState


def apply(state: ThreadState, event: Event) -> ThreadState:
    """Return the state that results from applying ``event`` to ``state``."""
    match event:
        case PageLoaded():
            return _page_loaded(state, event)
        case RepliesLoaded():
            return _replies_loaded(state, event)
        case CommentCreated(phase=Phase.OPTIMISTIC):
            return _comment_pending(state, event.temp_id, event.draft)
        case CommentCreated(phase=Phase.CONFIRMED):
            return _comment_confirmed(state, event)
        case CommentCreated(phase=Phase.FAILED):
            return _comment_failed(state, event.temp_id)
        case LikeToggled(phase=Phase.OPTIMISTIC):
            return _like_pending(state, event)
        case LikeToggled(phase=Phase.CONFIRMED):
            return _like_confirmed(state, event)
        case LikeToggled(phase=Phase.FAILED):
            return _like_failed(state, event)
        case CommentRefreshed():
            return _comment_refreshed(state, event.comment)
    raise TypeError(f"Unknown event: {event!r}")


# ----------------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------------


def _without(mapping: Mapping, key) -> dict:
    return {k: v for k, v in mapping.items() if k != key}


def _merge_refs(*groups: Iterable[NodeRef]) -> tuple[NodeRef, ...]:
    """Concatenate ref groups keeping the first occurrence of each ref."""
    seen: set[NodeRef] = set()
    merged = []
    for group in groups:
        for ref in group:
            if ref not in seen:
                seen.add(ref)
                merged.append(ref)
    return tuple(merged)


def _pending_refs(refs: Iterable[NodeRef]) -> list[NodeRef]:
    return [ref for ref in refs if isinstance(ref, Pending)]


def _upsert(
    state: ThreadState, nodes: dict[NodeRef, CommentNode], view: CommentView
) -> NodeRef:
    """Store the server's version of a comment in ``nodes``.

    While a like toggle is in flight the optimistic like state is kept; the
    toggle's own confirmation settles it.
    """
    node = CommentNode.from_view(view)
    current = nodes.get(node.ref) or state.nodes.get(node.ref)
    if view.id in state.pending_likes and current is not None:
        node = replace(
            node,
            is_liked_by_caller=current.is_liked_by_caller,
            likes_count=current.likes_count,
        )
    nodes[node.ref] = node
    return node.ref


def _committed_count(refs: Iterable[NodeRef]) -> int:
    return sum(1 for ref in refs if isinstance(ref, Committed))


def _note_unloaded(
    nodes: Mapping[NodeRef, CommentNode],
    children: Mapping[NodeRef, tuple[NodeRef, ...]],
    has_more: dict[NodeRef, bool],
    ref: NodeRef,
) -> None:
    """Mark a reply as expandable while its counter exceeds its loaded replies.

    Embedded slices are never taken as complete; only the counter decides.
    """
    loaded = _committed_count(children.get(ref, ()))
    has_more[ref] = nodes[ref].replies_count > loaded


def _adopt_preview(
    state: ThreadState,
    nodes: dict[NodeRef, CommentNode],
    children: dict[NodeRef, tuple[NodeRef, ...]],
    has_more: dict[NodeRef, bool],
    view: CommentView,
) -> NodeRef:
    """Upsert a comment and merge its embedded reply preview."""
    ref = _upsert(state, nodes, view)
    preview = [_upsert(state, nodes, reply) for reply in view.replies]
    existing = children.get(ref, ())

    # Pending replies stay on top, the preview is the newest committed
    # prefix, and previously expanded older replies follow.
    merged = _merge_refs(_pending_refs(existing), preview, existing)
    children[ref] = merged
    has_more[ref] = view.replies_count > _committed_count(merged)
    for reply in preview:
        _note_unloaded(nodes, children, has_more, reply)
    return ref


def _bump_replies(
    nodes: dict[NodeRef, CommentNode], ref: NodeRef | None, delta: int
) -> None:
    if ref is None or ref not in nodes:
        return
    node = nodes[ref]
    nodes[ref] = replace(node, replies_count=max(node.replies_count + delta, 0))


# ----------------------------------------------------------------------------
# Listing
# ----------------------------------------------------------------------------


def _page_loaded(state: ThreadState, event: PageLoaded) -> ThreadState:
    if event.page == 1:
        # Fresh listing: keep only comments still waiting on the server
        pending = {
            ref: node for ref, node in state.nodes.items() if isinstance(ref, Pending)
        }
        nodes: dict[NodeRef, CommentNode] = dict(pending)
        children = {
            parent: tuple(_pending_refs(refs))
            for parent, refs in state.children.items()
            if _pending_refs(refs)
        }
        roots_before: tuple[NodeRef, ...] = tuple(_pending_refs(state.roots))
        has_more: dict[NodeRef, bool] = {}
    else:
        nodes = dict(state.nodes)
        children = dict(state.children)
        roots_before = state.roots
        has_more = dict(state.replies_has_more)

    page_refs = [
        _adopt_preview(state, nodes, children, has_more, view)
        for view in event.comments
    ]

    # Offset pages may overlap when comments arrive between loads
    roots = _merge_refs(roots_before, page_refs)

    return replace(
        state,
        nodes=nodes,
        roots=roots,
        children=children,
        replies_has_more=has_more,
        page=event.page,
        has_more=event.has_more,
        total_count=event.total_count,
    )


def _replies_loaded(state: ThreadState, event: RepliesLoaded) -> ThreadState:
    parent = Committed(event.parent_id)
    if parent not in state.nodes:
        return state

    nodes = dict(state.nodes)
    batch = [_upsert(state, nodes, reply) for reply in event.replies]
    children = {
        **state.children,
        parent: _merge_refs(state.children.get(parent, ()), batch),
    }
    has_more = {**state.replies_has_more, parent: event.has_more}
    for reply in batch:
        _note_unloaded(nodes, children, has_more, reply)

    return replace(state, nodes=nodes, children=children, replies_has_more=has_more)


def _comment_refreshed(state: ThreadState, view: CommentView) -> ThreadState:
    ref = Committed(view.id)
    if ref not in state.nodes:
        return state

    nodes = dict(state.nodes)
    children = dict(state.children)
    has_more = dict(state.replies_has_more)
    _adopt_preview(state, nodes, children, has_more, view)

    return replace(state, nodes=nodes, children=children, replies_has_more=has_more)


# ----------------------------------------------------------------------------
# Comment submission
# ----------------------------------------------------------------------------


def _comment_pending(
    state: ThreadState, temp_id: str, draft: CommentDraft
) -> ThreadState:
    ref = Pending(temp_id)
    parent = Committed(draft.parent_id) if draft.parent_id else None
    if parent is not None and parent not in state.nodes:
        return state

    level = state.nodes[parent].level + 1 if parent is not None else 0
    nodes = dict(state.nodes)
    nodes[ref] = CommentNode(
        ref=ref,
        parent=parent,
        post_id=draft.post_id,
        author_id=draft.author_id,
        author_display_name=draft.author_display_name,
        author_avatar_url=draft.author_avatar_url,
        content=draft.content,
        level=level,
        likes_count=0,
        replies_count=0,
        is_liked_by_caller=False,
    )

    if parent is None:
        return replace(
            state,
            nodes=nodes,
            roots=(ref, *state.roots),
            total_count=state.total_count + 1,
        )

    _bump_replies(nodes, parent, 1)
    return replace(
        state,
        nodes=nodes,
        children={**state.children, parent: (ref, *state.children.get(parent, ()))},
    )


def _comment_confirmed(state: ThreadState, event: CommentCreated) -> ThreadState:
    pending = Pending(event.temp_id)
    if pending not in state.nodes or event.comment is None:
        return state

    nodes = _without(state.nodes, pending)
    committed = _upsert(state, nodes, event.comment)

    def swap(refs: tuple[NodeRef, ...]) -> tuple[NodeRef, ...]:
        return _merge_refs(committed if r == pending else r for r in refs)

    return replace(
        state,
        nodes=nodes,
        roots=swap(state.roots),
        children={parent: swap(refs) for parent, refs in state.children.items()},
    )


def _comment_failed(state: ThreadState, temp_id: str) -> ThreadState:
    ref = Pending(temp_id)
    node = state.nodes.get(ref)
    if node is None:
        return state

    nodes = _without(state.nodes, ref)
    children = {
        parent: tuple(r for r in refs if r != ref)
        for parent, refs in state.children.items()
        if parent != ref
    }

    if node.parent is None:
        return replace(
            state,
            nodes=nodes,
            roots=tuple(r for r in state.roots if r != ref),
            children=children,
            total_count=max(state.total_count - 1, 0),
        )

    _bump_replies(nodes, node.parent, -1)
    return replace(state, nodes=nodes, children=children)


# ----------------------------------------------------------------------------
# Like coalescing
# ----------------------------------------------------------------------------


def _like_pending(state: ThreadState, event: LikeToggled) -> ThreadState:
    ref = Committed(event.comment_id)
    node = state.nodes.get(ref)
    if node is None:
        return state

    previous = state.pending_likes.get(event.comment_id)
    pending = PendingLike(
        request_seq=event.request_seq,
        # Rollback target stays the last confirmed state, not an optimistic one
        fallback_liked=previous.fallback_liked if previous else node.is_liked_by_caller,
        fallback_likes_count=(
            previous.fallback_likes_count if previous else node.likes_count
        ),
    )
    liked = not node.is_liked_by_caller
    toggled = replace(
        node,
        is_liked_by_caller=liked,
        likes_count=max(node.likes_count + (1 if liked else -1), 0),
    )

    return replace(
        state,
        nodes={**state.nodes, ref: toggled},
        pending_likes={**state.pending_likes, event.comment_id: pending},
        like_seq=max(state.like_seq, event.request_seq),
    )


def _like_confirmed(state: ThreadState, event: LikeToggled) -> ThreadState:
    pending = state.pending_likes.get(event.comment_id)
    if pending is None or event.liked is None or event.likes_count is None:
        return state

    if event.request_seq < pending.request_seq:
        # Superseded: remember as last known-good, keep showing the latest
        return replace(
            state,
            pending_likes={
                **state.pending_likes,
                event.comment_id: replace(
                    pending,
                    fallback_liked=event.liked,
                    fallback_likes_count=event.likes_count,
                ),
            },
        )

    ref = Committed(event.comment_id)
    nodes = dict(state.nodes)
    if ref in nodes:
        nodes[ref] = replace(
            nodes[ref],
            is_liked_by_caller=event.liked,
            likes_count=event.likes_count,
        )
    return replace(
        state,
        nodes=nodes,
        pending_likes=_without(state.pending_likes, event.comment_id),
    )


def _like_failed(state: ThreadState, event: LikeToggled) -> ThreadState:
    pending = state.pending_likes.get(event.comment_id)
    if pending is None or event.request_seq < pending.request_seq:
        # A newer toggle owns the outcome
        return state

    ref = Committed(event.comment_id)
    nodes = dict(state.nodes)
    if ref in nodes:
        nodes[ref] = replace(
            nodes[ref],
            is_liked_by_caller=pending.fallback_liked,
            likes_count=pending.fallback_likes_count,
        )
    return replace(
        state,
        nodes=nodes,
        pending_likes=_without(state.pending_likes, event.comment_id),
    )

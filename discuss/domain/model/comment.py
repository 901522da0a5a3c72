"""Comment entity.

Comments form a tree per post. The tree is stored flat: every node keeps a
back-reference to its parent and nesting is rebuilt only when presenting.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, PostId, UserId
from discuss.domain.value.types import DisplayName

MAX_CONTENT_LENGTH = 1000


class Comment(DomainModel):
    """Comment entity.

    Represents a root comment on a post or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for root comments)
    - level: Depth in the tree, derived from the parent (0 for roots)

    Two counters are cached on the row and only ever change together with
    the write that justifies them:
    - likes_count: Number of like rows referencing this comment
    - replies_count: Number of direct children (not all descendants)
    """

    id: CommentId
    post_id: PostId
    parent_id: Optional[CommentId] = None
    author_id: UserId
    author_display_name: DisplayName
    author_avatar_url: Optional[str] = None
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    level: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

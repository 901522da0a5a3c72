"""Like membership record.

The existence of a row means "this user currently likes this comment".
There is no boolean flag; toggling creates or removes the row.
"""

from datetime import datetime

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId, UserId


class Like(DomainModel):
    """Like keyed by (comment_id, user_id)."""

    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)

"""Domain value objects for the comment engine."""

from enum import Enum

from pydantic import field_validator

from discuss.domain.value.common import RootValueObject, ValueObject
from discuss.domain.value.identifiers import UserId


class CommentOrder(str, Enum):
    """Supported orderings for comment listings."""

    NEWEST = "newest"  # created_at DESC, id DESC
    MOST_LIKED = "most_liked"  # likes_count DESC, then NEWEST


class DisplayName(RootValueObject[str]):
    """Human-readable author name shown next to a comment."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not blank and within length limits."""
        if not v.strip() or len(v) > 255:
            raise ValueError("Display name must be 1-255 characters")
        return v


class Caller(ValueObject):
    """Authenticated user as supplied by the session collaborator.

    The engine never issues or checks credentials itself; it only receives
    this already-resolved identity.
    """

    user_id: UserId
    display_name: DisplayName
    avatar_url: str | None = None


class LikeState(ValueObject):
    """Result of a like toggle: the caller's membership and the new count."""

    liked: bool
    likes_count: int

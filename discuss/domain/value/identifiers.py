"""Strongly typed identifiers for the comment engine.

Post and user identifiers are owned by external collaborators; the engine
only carries them around. Comment identifiers are assigned by the store.
"""

from typing import NewType
from uuid import UUID

PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)
CommentId = NewType("CommentId", UUID)

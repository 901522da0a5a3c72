"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input: bad content, pagination parameters or cursors.

    Always recoverable by the caller and never retried automatically.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a referenced comment or parent does not exist."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidParentError(NotFoundError):
    """Raised when a reply's parent belongs to a different post."""

    def __init__(self, parent_id: str, post_id: str):
        self.resource = "parent comment"
        self.identifier = parent_id
        self.post_id = post_id
        DomainError.__init__(
            self, f"Parent comment {parent_id} does not belong to post {post_id}"
        )


class AuthError(DomainError):
    """Raised when a mutating call has no resolvable caller identity."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class ConflictError(DomainError):
    """A write could not serialize against a concurrent one.

    Repositories raise this when they lose a race on a single row; services
    retry a bounded number of times before letting it surface as a
    transient failure.
    """

    def __init__(self, resource: str, key: str):
        self.resource = resource
        self.key = key
        super().__init__(f"Concurrent update conflict on {resource} {key}")

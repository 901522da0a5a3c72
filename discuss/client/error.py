"""Client layer errors.

Server-side failures are mapped back onto the domain errors
(``discuss.domain.error``); these cover what the domain cannot express.
"""


class ClientError(Exception):
    """Base client error."""

    pass


class TransportError(ClientError):
    """The request never produced an HTTP response (network error or timeout)."""

    pass


class UnexpectedResponseError(ClientError):
    """The server answered with a status the client does not understand."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Unexpected response {status_code}: {detail}")

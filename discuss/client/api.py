"""Transport used by the reconciler to reach the comments API."""

from abc import ABC, abstractmethod

import httpx
import logfire

from discuss.application.usecase.comment import (
    CommentView,
    ListCommentsResponse,
    LoadRepliesResponse,
)
from discuss.application.usecase.like import ToggleLikeResponse
from discuss.domain.error import (
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from discuss.domain.value import CommentOrder

from .error import TransportError, UnexpectedResponseError


class CommentsApi(ABC):
    """Remote operations the client reconciles against."""

    @abstractmethod
    async def list_comments(
        self,
        post_id: str,
        page: int = 1,
        page_size: int | None = None,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> ListCommentsResponse:
        pass

    @abstractmethod
    async def create_comment(
        self, post_id: str, content: str, parent_id: str | None = None
    ) -> CommentView:
        pass

    @abstractmethod
    async def get_comment(self, comment_id: str) -> CommentView:
        pass

    @abstractmethod
    async def load_replies(
        self, comment_id: str, after_id: str | None = None
    ) -> LoadRepliesResponse:
        pass

    @abstractmethod
    async def toggle_like(self, comment_id: str, liked: bool) -> ToggleLikeResponse:
        """Toggle the caller's like.

        Args:
            comment_id: Comment ID
            liked: State the caller expects after the toggle (selects the
                HTTP verb; the server flips membership either way)
        """
        pass


class HttpCommentsApi(CommentsApi):
    """httpx implementation of the comments API.

    The ``httpx.AsyncClient`` is owned by the caller, which configures the
    base URL and timeouts.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None) -> None:
        """Initialize HTTP transport.

        Args:
            client: Async HTTP client pointed at the API
            token: Session token sent as a bearer credential
        """
        self.client = client
        self.token = token

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send a request and map failures onto the error taxonomy.

        Raises:
            TransportError: On network errors and timeouts
            ValidationError: On 400
            AuthError: On 401
            NotFoundError: On 404
            ConflictError: On 503
            UnexpectedResponseError: On any other non-2xx status
        """
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = await self.client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {url} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if response.is_success:
            return response

        detail = _detail(response)
        logfire.warn(
            "Comments API error",
            method=method,
            url=url,
            status=response.status_code,
            detail=detail,
        )
        match response.status_code:
            case 400:
                raise ValidationError(detail)
            case 401:
                raise AuthError(f"{method} {url}")
            case 404:
                raise NotFoundError(url, detail)
            case 503:
                raise ConflictError(url, response.headers.get("Retry-After", "?"))
            case _:
                raise UnexpectedResponseError(response.status_code, detail)

    async def list_comments(
        self,
        post_id: str,
        page: int = 1,
        page_size: int | None = None,
        order: CommentOrder = CommentOrder.NEWEST,
    ) -> ListCommentsResponse:
        params: dict[str, str | int] = {"page": page, "order": order.value}
        if page_size is not None:
            params["page_size"] = page_size
        response = await self._request(
            "GET", f"/posts/{post_id}/comments", params=params
        )
        return ListCommentsResponse.model_validate(response.json())

    async def create_comment(
        self, post_id: str, content: str, parent_id: str | None = None
    ) -> CommentView:
        response = await self._request(
            "POST",
            f"/posts/{post_id}/comments",
            json={"content": content, "parent_id": parent_id},
        )
        return CommentView.model_validate(response.json())

    async def get_comment(self, comment_id: str) -> CommentView:
        response = await self._request("GET", f"/comments/{comment_id}")
        return CommentView.model_validate(response.json())

    async def load_replies(
        self, comment_id: str, after_id: str | None = None
    ) -> LoadRepliesResponse:
        params = {"after_id": after_id} if after_id else {}
        response = await self._request(
            "GET", f"/comments/{comment_id}/replies", params=params
        )
        return LoadRepliesResponse.model_validate(response.json())

    async def toggle_like(self, comment_id: str, liked: bool) -> ToggleLikeResponse:
        response = await self._request(
            "POST" if liked else "DELETE", f"/comments/{comment_id}/like"
        )
        return ToggleLikeResponse.model_validate(response.json())


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text

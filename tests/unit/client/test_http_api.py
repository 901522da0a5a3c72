"""Unit tests for HttpCommentsApi error mapping."""

import httpx
import pytest

from discuss.client import HttpCommentsApi, TransportError, UnexpectedResponseError
from discuss.domain.error import (
    AuthError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def _api(handler, token: str | None = "secret") -> HttpCommentsApi:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test"
    )
    return HttpCommentsApi(client, token=token)


class TestHttpCommentsApi:
    """Tests for HttpCommentsApi."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,error",
        [
            (400, ValidationError),
            (401, AuthError),
            (404, NotFoundError),
            (503, ConflictError),
            (500, UnexpectedResponseError),
        ],
    )
    async def test_status_codes_map_to_errors(self, status_code, error):
        """Non-2xx responses raise the matching error."""
        # Arrange
        api = _api(lambda request: httpx.Response(status_code, json={"detail": "x"}))

        # Act & Assert
        with pytest.raises(error):
            await api.get_comment("abc")

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self):
        """Connection problems surface as TransportError."""

        # Arrange
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        api = _api(handler)

        # Act & Assert
        with pytest.raises(TransportError):
            await api.get_comment("abc")

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        """Timeouts surface as TransportError."""

        # Arrange
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        api = _api(handler)

        # Act & Assert
        with pytest.raises(TransportError):
            await api.toggle_like("abc", liked=True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("liked,method", [(True, "POST"), (False, "DELETE")])
    async def test_toggle_like_verb_and_bearer(self, liked, method):
        """The expected state picks the verb; the token rides as a bearer."""
        # Arrange
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"liked": liked, "likes_count": 1})

        api = _api(handler)

        # Act
        result = await api.toggle_like("abc", liked=liked)

        # Assert
        assert result.liked is liked
        assert seen[0].method == method
        assert seen[0].url.path == "/comments/abc/like"
        assert seen[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_anonymous_requests_send_no_credentials(self):
        """Without a token no Authorization header is sent."""
        # Arrange
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"replies": [], "has_more": False})

        api = _api(handler, token=None)

        # Act
        await api.load_replies("abc", after_id="def")

        # Assert
        assert "Authorization" not in seen[0].headers
        assert seen[0].url.params["after_id"] == "def"

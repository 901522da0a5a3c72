"""Mock session providers for testing."""

from dishka import Scope, provide

from discuss.adapter.session import MockSessionResolver
from discuss.domain.service import SessionResolver
from discuss.util.di.infrastructure.session import SessionProvider


class MockSessionProvider(SessionProvider):
    """Mock session provider accepting ``"{user_id}|{display_name}"`` tokens."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_session_resolver(self) -> SessionResolver:
        """Provide mock session resolver."""
        return MockSessionResolver()

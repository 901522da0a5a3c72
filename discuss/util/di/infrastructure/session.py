"""Session resolution infrastructure providers."""

from dishka import Scope, provide

from discuss.adapter.session import JWTSessionResolver
from discuss.config import Settings
from discuss.domain.service import SessionResolver
from discuss.util.di.base import ProviderBase
from discuss.util.error import ConfigurationError

_DEFAULT_SECRET = "CHANGE_ME_IN_PRODUCTION"


class SessionProvider(ProviderBase):
    """Session component base."""

    __mock_component__ = "session"


class ProdSessionProvider(SessionProvider):
    """Production session provider verifying identity service JWTs."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_session_resolver(self, settings: Settings) -> SessionResolver:
        """Provide JWT session resolver.

        Raises:
            ConfigurationError: If the default secret is used outside development
        """
        if (
            settings.environment in ("staging", "production")
            and settings.auth.jwt_secret == _DEFAULT_SECRET
        ):
            raise ConfigurationError(
                "AUTH__JWT_SECRET", "must be set outside development"
            )
        return JWTSessionResolver(settings.auth)

"""Profile directory infrastructure providers."""

from dishka import Scope, provide

from arena.adapter.profiles import PostgrestProfileDirectory
from arena.config import Settings
from arena.domain.service import ProfileDirectory
from arena.util.di.base import ProviderBase
from arena.util.error import ConfigurationError


class ProfilesProvider(ProviderBase):
    """Profile directory component base."""

    __mock_component__ = "profiles"


class ProdProfilesProvider(ProfilesProvider):
    """Production profile directory backed by PostgREST."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_profile_directory(self, settings: Settings) -> ProfileDirectory:
        """Provide profile directory.

        Raises:
            ConfigurationError: If the directory endpoint is not configured
        """
        if not settings.profiles.base_url:
            raise ConfigurationError("Profile directory base URL must be configured")

        return PostgrestProfileDirectory(
            base_url=settings.profiles.base_url,
            service_key=settings.profiles.service_key,
            table=settings.profiles.table,
            timeout=settings.profiles.timeout_seconds,
        )

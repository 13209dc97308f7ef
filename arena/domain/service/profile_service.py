"""Artist profile lookup domain service."""

from abc import ABC, abstractmethod

import logfire

from arena.domain.value import ArtistUid, ProfileLite

from .base import Service


class ProfileDirectory(ABC):
    """Read-only directory of artist profiles.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def exists(self, artist_uid: ArtistUid) -> bool:
        """Check whether an artist profile exists.

        Args:
            artist_uid: Artist to look up

        Returns:
            True if the artist has a profile

        Raises:
            ProfileDirectoryError: If the directory cannot be reached
        """
        pass

    @abstractmethod
    async def resolve_many(
        self, artist_uids: list[ArtistUid]
    ) -> dict[ArtistUid, ProfileLite]:
        """Resolve display metadata for many artists at once.

        Unknown uids are absent from the result.

        Args:
            artist_uids: Artists to resolve

        Returns:
            Map of artist uid to profile

        Raises:
            ProfileDirectoryError: If the directory cannot be reached
        """
        pass


class ProfileService(Service):
    """Domain service wrapping the profile directory for display needs."""

    FALLBACK_DISPLAY_NAME = "An artist"

    def __init__(self, profile_directory: ProfileDirectory) -> None:
        """Initialize profile service.

        Args:
            profile_directory: Directory of artist profiles
        """
        self.profile_directory = profile_directory

    async def resolve_for_display(
        self, artist_uids: list[ArtistUid]
    ) -> dict[ArtistUid, ProfileLite]:
        """Resolve profiles, degrading to an empty map on any directory failure.

        Args:
            artist_uids: Artists to resolve (duplicates and blanks ignored)

        Returns:
            Map of artist uid to profile, possibly empty
        """
        uids = list(dict.fromkeys(u.strip() for u in artist_uids if u and u.strip()))
        if not uids:
            return {}

        with logfire.span("profile_service.resolve_for_display", count=len(uids)):
            try:
                return await self.profile_directory.resolve_many(
                    [ArtistUid(u) for u in uids]
                )
            except Exception as e:
                logfire.warn(
                    "Profile resolution failed, returning no profiles",
                    count=len(uids),
                    error=str(e),
                )
                return {}

    async def display_name(self, artist_uid: ArtistUid) -> str:
        """Best display name for an artist, with a generic fallback.

        Args:
            artist_uid: Artist to name

        Returns:
            Stage name, then legal name, then a generic fallback
        """
        profiles = await self.resolve_for_display([artist_uid])
        profile = profiles.get(artist_uid)
        if profile and profile.display_name:
            return profile.display_name
        return self.FALLBACK_DISPLAY_NAME

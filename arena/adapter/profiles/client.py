"""Artist profile directory clients.

The production directory is the `artist_profiles` resource exposed by a
PostgREST (Supabase) endpoint. Rows look like:

    {
        "artist_uid": "u_123",
        "stage_name": "DJ Nova",
        "name": "Nomvula Dlamini",
        "profile_photo_url": "https://...",
        "verification_badge": true
    }
"""

from typing import Any

import httpx
import logfire

from arena.adapter.error import ProfileDirectoryError
from arena.domain.service.profile_service import ProfileDirectory
from arena.domain.value import ArtistUid, ProfileLite

PROFILE_FIELDS = "artist_uid,stage_name,name,profile_photo_url,verification_badge"

# Uids per `in.(...)` filter; larger lookups are split into several requests
MAX_BATCH = 200


class PostgrestProfileDirectory(ProfileDirectory):
    """Profile directory backed by the PostgREST HTTP API."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        table: str = "artist_profiles",
        timeout: float = 5.0,
    ) -> None:
        """Initialize PostgREST profile directory.

        Args:
            base_url: Project URL, without the `/rest/v1` suffix
            service_key: Service role key sent as apikey and bearer token
            table: Profile table name
            timeout: Request timeout in seconds
        """
        self.resource_url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.service_key = service_key
        self.timeout = timeout

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Accept": "application/json",
        }

    async def exists(self, artist_uid: ArtistUid) -> bool:
        rows = await self._select(
            {"select": "artist_uid", "artist_uid": f"eq.{artist_uid}", "limit": "1"}
        )
        return len(rows) > 0

    async def resolve_many(
        self, artist_uids: list[ArtistUid]
    ) -> dict[ArtistUid, ProfileLite]:
        uids = list(dict.fromkeys(u for u in artist_uids if u))

        profiles: dict[ArtistUid, ProfileLite] = {}
        for start in range(0, len(uids), MAX_BATCH):
            chunk = uids[start : start + MAX_BATCH]
            rows = await self._select(
                {
                    "select": PROFILE_FIELDS,
                    "artist_uid": f"in.({','.join(_quote(u) for u in chunk)})",
                    "limit": str(len(chunk)),
                }
            )
            for row in rows:
                profile = _row_to_profile(row)
                if profile is not None:
                    profiles[profile.artist_uid] = profile
        return profiles

    async def _select(self, params: dict[str, str]) -> list[dict[str, Any]]:
        """Run a PostgREST select.

        Raises:
            ProfileDirectoryError: On transport errors or non-200 responses
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.resource_url,
                    params=params,
                    headers=self._headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Profile directory HTTP error", error=str(e))
            raise ProfileDirectoryError(f"HTTP error querying profiles: {e}")

        if response.status_code != 200:
            logfire.error(
                "Profile directory request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProfileDirectoryError(
                f"Profile query failed: {response.status_code}"
            )

        data = response.json()
        if not isinstance(data, list):
            raise ProfileDirectoryError("Unexpected profile directory response")
        return [row for row in data if isinstance(row, dict)]


def _quote(value: str) -> str:
    """Quote a value for a PostgREST `in.(...)` filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _row_to_profile(row: dict[str, Any]) -> ProfileLite | None:
    uid = str(row.get("artist_uid") or "").strip()
    if not uid:
        return None
    return ProfileLite(
        artist_uid=ArtistUid(uid),
        stage_name=str(row.get("stage_name") or "").strip(),
        name=str(row.get("name") or "").strip(),
        profile_photo_url=row.get("profile_photo_url") or None,
        verification_badge=bool(row.get("verification_badge")),
    )


class InMemoryProfileDirectory(ProfileDirectory):
    """In-memory profile directory for development and testing."""

    def __init__(self, profiles: list[ProfileLite] | None = None) -> None:
        self.profiles: dict[ArtistUid, ProfileLite] = {}
        self.fail = False
        for profile in profiles or []:
            self.register(profile)

    def register(self, profile: ProfileLite) -> ProfileLite:
        """Add or replace a profile."""
        self.profiles[profile.artist_uid] = profile
        return profile

    async def exists(self, artist_uid: ArtistUid) -> bool:
        self._check()
        return artist_uid in self.profiles

    async def resolve_many(
        self, artist_uids: list[ArtistUid]
    ) -> dict[ArtistUid, ProfileLite]:
        self._check()
        return {uid: self.profiles[uid] for uid in artist_uids if uid in self.profiles}

    def _check(self) -> None:
        # Tests flip this to simulate an unreachable directory
        if self.fail:
            raise ProfileDirectoryError("Profile directory unavailable")

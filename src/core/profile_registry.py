# src/core/profile_registry.py
from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, List, Mapping, Tuple

from src.config import settings
from src.config.env import APP_ENV, ENV_DEV
from src.core.miner_models import MinerProfile


class UnknownProfile(LookupError):
    """Raised when a profile key is not in the registry."""


class ProfileRegistry:
    """
    Read-only table of traditional miner profiles.

    Order is registration order and only matters for presentation.
    """

    def __init__(
        self,
        profiles: Mapping[str, MinerProfile],
        default_key: str | None = None,
    ) -> None:
        if not profiles:
            raise ValueError("ProfileRegistry needs at least one profile")
        for key, profile in profiles.items():
            if key != profile.key:
                raise ValueError(
                    f"Registry key {key!r} does not match profile key {profile.key!r}"
                )
        self._profiles: Mapping[str, MinerProfile] = MappingProxyType(dict(profiles))
        if default_key is None or default_key not in self._profiles:
            default_key = next(iter(self._profiles))
        self._default_key = default_key

    def get(self, key: str) -> MinerProfile:
        try:
            return self._profiles[key]
        except KeyError:
            raise UnknownProfile(f"Unknown miner profile: {key!r}") from None

    def list(self) -> List[Tuple[str, MinerProfile]]:
        return list(self._profiles.items())

    def keys(self) -> List[str]:
        return list(self._profiles)

    @property
    def default_key(self) -> str:
        return self._default_key

    def default(self) -> MinerProfile:
        return self._profiles[self._default_key]

    def __contains__(self, key: object) -> bool:
        return key in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)


def load_registry() -> ProfileRegistry:
    """Build the registry for the current environment (dev catalogues in dev)."""
    if APP_ENV == ENV_DEV:
        from src.data.miners_dev import get_dev_catalogue

        profiles = get_dev_catalogue(settings.DEV_PROFILE_SET)
    else:
        from src.data.miners_prod import PROFILES as profiles

    return ProfileRegistry(profiles, default_key=settings.DEFAULT_PROFILE_KEY)

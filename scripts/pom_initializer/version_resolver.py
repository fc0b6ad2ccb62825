"""Latest-version resolution with fallback.

A ``VersionLookup`` is any object with a
``lookup_newest_version(group_id, artifact_id, kind) -> str`` method that
returns the newest stable version or raises a ``ResolutionFailure``
subclass. ``MavenCentralLookup`` is the default; tests inject fakes.

The resolver never raises for lookup failures: it substitutes the fallback
sentinel and records the coordinate as a fallback instead.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Protocol

from .errors import ResolutionFailure
from .pom_models import FALLBACK_VERSION, PackageKind, ResolvableCoordinate, ResolvedVersions

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class VersionLookup(Protocol):
    def lookup_newest_version(self, group_id: str, artifact_id: str, kind: PackageKind) -> str:
        ...


class VersionResolver:
    """Resolves newest versions through an injected lookup.

    Holds no per-run state, so one instance can serve concurrent runs.
    """

    def __init__(self, lookup: VersionLookup, fallback: str = FALLBACK_VERSION,
                 max_workers: int = DEFAULT_MAX_WORKERS):
        self.lookup = lookup
        self.fallback = fallback
        self.max_workers = max(1, max_workers)

    def resolve_version(self, group_id: str, artifact_id: str, kind: PackageKind,
                        fallback: Optional[str] = None) -> str:
        """Return the newest acceptable version, or ``fallback`` on failure."""
        version, _ = self._resolve(group_id, artifact_id, kind, fallback)
        return version

    def _resolve(self, group_id, artifact_id, kind, fallback=None):
        """Look up one coordinate.

        Returns:
            ``(version, used_fallback)``.
        """
        fallback = self.fallback if fallback is None else fallback
        try:
            version = self.lookup.lookup_newest_version(group_id, artifact_id, kind)
        except ResolutionFailure as exc:
            logger.warning("Failed to resolve latest version for %s:%s (using fallback %s): %s",
                           group_id, artifact_id, fallback, exc)
            return fallback, True
        except Exception:
            logger.exception("Unexpected error resolving %s:%s (using fallback %s)",
                             group_id, artifact_id, fallback)
            return fallback, True
        if not version:
            logger.warning("No version found for %s:%s (using fallback %s)",
                           group_id, artifact_id, fallback)
            return fallback, True
        logger.debug("Resolved latest version %s:%s -> %s", group_id, artifact_id, version)
        return version, False

    def resolve_all(self, coordinates: Iterable[ResolvableCoordinate]) -> ResolvedVersions:
        """Resolve every coordinate, fanning out over a bounded thread pool.

        Results are collected in submission order so the returned mapping is
        ordered like ``coordinates`` regardless of completion order.

        Args:
            coordinates: Catalog coordinates; each is looked up with its own kind.

        Returns:
            A ResolvedVersions covering every distinct coordinate.
        """
        pending = []
        seen = set()
        for coord in coordinates:
            if coord not in seen:
                seen.add(coord)
                pending.append(coord)

        resolved = ResolvedVersions()
        if not pending:
            return resolved

        if len(pending) == 1:
            coord = pending[0]
            resolved.record(coord, *self._resolve(coord.group_id, coord.artifact_id, coord.kind))
            return resolved

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(pending))) as pool:
            futures = [
                (coord, pool.submit(self._resolve, coord.group_id, coord.artifact_id, coord.kind))
                for coord in pending
            ]
            for coord, future in futures:
                resolved.record(coord, *future.result())
        return resolved

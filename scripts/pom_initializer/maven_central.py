"""Version lookup against a Maven repository's ``maven-metadata.xml``.

The default ``VersionLookup``: lists the published versions of an artifact,
drops snapshots and previews, and returns the newest one whose artifact file
(for the requested package kind) is actually present in the repository.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

import requests

from .config import DEFAULT_REPOSITORY_URL
from .errors import TransientLookupError, VersionNotFoundError
from .pom_models import PackageKind

logger = logging.getLogger(__name__)

# Qualifier tokens marking a pre-release. Matched against whole tokens only,
# so "jre" or "android" stay stable while "M1", "RC2", "beta" do not.
PREVIEW_QUALIFIERS = {
    "snapshot", "alpha", "a", "beta", "b", "milestone", "m",
    "rc", "cr", "preview", "pre", "ea", "dev",
}

# Qualifiers equivalent to a plain release in Maven ordering.
RELEASE_QUALIFIERS = {"ga", "final", "release"}

# How many of the newest stable versions are probed for a published artifact.
MAX_CANDIDATES = 3

_TOKEN = re.compile(r"\d+|[A-Za-z]+")


def _tokens(version: str) -> list:
    return _TOKEN.findall(version)


def is_stable_version(version: str) -> bool:
    """Return ``True`` unless the version is a snapshot or a preview release.

    Examples:
        ``3.27.5``, ``33.0.0-jre``, ``5.10.0.Final`` are stable;
        ``1.0-SNAPSHOT``, ``6.0.0-M1``, ``2.0.0-RC2``, ``1.0.0-beta`` are not.
    """
    if not version or not version.strip():
        return False
    return not any(t.lower() in PREVIEW_QUALIFIERS for t in _tokens(version) if not t.isdigit())


def version_sort_key(version: str) -> tuple:
    """Sort key approximating Maven's version ordering for stable versions.

    Numeric tokens compare numerically, trailing zeros are insignificant,
    release qualifiers (``Final``, ``GA``) are ignored and any other
    qualifier sorts after the plain release it decorates.
    """
    items = []
    for token in _tokens(version):
        if token.isdigit():
            items.append((1, int(token), ""))
        elif token.lower() not in RELEASE_QUALIFIERS:
            items.append((0, 0, token.lower()))
    while items and items[-1] == (1, 0, ""):
        items.pop()
    return tuple(items)


def parse_metadata_versions(xml_text: str) -> list:
    """Extract ``<versioning><versions><version>`` values from repository metadata.

    Raises:
        TransientLookupError: If the metadata is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise TransientLookupError(f"Invalid repository metadata: {exc}") from exc
    versions = []
    for el in root.findall("./versioning/versions/version"):
        if el.text and el.text.strip():
            versions.append(el.text.strip())
    return versions


class MavenCentralLookup:
    """Finds the newest stable version of an artifact in a Maven repository.

    Args:
        repository_url: Repository root (defaults to Maven Central).
        timeout: Per-request timeout in seconds.
        session: HTTP session to use; a new ``requests.Session`` if omitted.
    """

    def __init__(
        self,
        repository_url: str = DEFAULT_REPOSITORY_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.repository_url = repository_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _artifact_url(self, group_id: str, artifact_id: str) -> str:
        return f"{self.repository_url}/{group_id.replace('.', '/')}/{artifact_id}"

    def fetch_versions(self, group_id: str, artifact_id: str) -> list:
        """Return every version listed in the artifact's ``maven-metadata.xml``."""
        url = f"{self._artifact_url(group_id, artifact_id)}/maven-metadata.xml"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransientLookupError(f"Failed to fetch {url}: {exc}") from exc
        if response.status_code == 404:
            raise VersionNotFoundError(f"No metadata for {group_id}:{artifact_id}")
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransientLookupError(f"Failed to fetch {url}: {exc}") from exc
        return parse_metadata_versions(response.text)

    def _is_published(self, group_id: str, artifact_id: str, version: str, kind: PackageKind) -> bool:
        url = (f"{self._artifact_url(group_id, artifact_id)}/{version}/"
               f"{artifact_id}-{version}.{kind.extension}")
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise TransientLookupError(f"Failed to check {url}: {exc}") from exc
        if response.status_code == 404:
            return False
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransientLookupError(f"Failed to check {url}: {exc}") from exc
        return True

    def lookup_newest_version(self, group_id: str, artifact_id: str, kind: PackageKind) -> str:
        """Return the newest stable, published version of a coordinate.

        Args:
            group_id: Maven groupId.
            artifact_id: Maven artifactId.
            kind: Selects which artifact file (``.jar`` / ``.pom``) must exist.

        Raises:
            VersionNotFoundError: No stable version with a published artifact.
            TransientLookupError: The repository could not be queried.
        """
        stable = [v for v in self.fetch_versions(group_id, artifact_id) if is_stable_version(v)]
        if not stable:
            raise VersionNotFoundError(f"No stable version of {group_id}:{artifact_id}")
        candidates = sorted(dict.fromkeys(stable), key=version_sort_key, reverse=True)
        for version in candidates[:MAX_CANDIDATES]:
            if self._is_published(group_id, artifact_id, version, kind):
                return version
            logger.debug("%s:%s:%s has no %s artifact, trying older version",
                         group_id, artifact_id, version, kind.extension)
        raise VersionNotFoundError(
            f"No published {kind.extension} for the newest versions of {group_id}:{artifact_id}"
        )

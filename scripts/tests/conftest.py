"""Shared test fixtures for the project generation test suite."""

import threading
import xml.etree.ElementTree as ET

import pytest

from pom_initializer.errors import TransientLookupError, VersionNotFoundError
from pom_initializer.pom_models import AssertionLibrary, ProjectRequest

NS = {"m": "http://maven.apache.org/POM/4.0.0"}


class FakeLookup:
    """In-memory VersionLookup.

    Returns ``default`` for every coordinate unless an artifactId is listed
    in ``versions`` (explicit answer), ``missing`` (not found) or
    ``broken`` (transient error).
    """

    def __init__(self, default="9.9.9", versions=None, missing=(), broken=()):
        self.default = default
        self.versions = dict(versions or {})
        self.missing = set(missing)
        self.broken = set(broken)
        self.calls = []
        self._lock = threading.Lock()

    def lookup_newest_version(self, group_id, artifact_id, kind):
        with self._lock:
            self.calls.append((group_id, artifact_id, kind))
        if artifact_id in self.missing:
            raise VersionNotFoundError(f"{group_id}:{artifact_id} not found")
        if artifact_id in self.broken:
            raise TransientLookupError(f"{group_id}:{artifact_id} timed out")
        return self.versions.get(artifact_id, self.default)


class FailingLookup(FakeLookup):
    """A lookup for which every query fails."""

    def lookup_newest_version(self, group_id, artifact_id, kind):
        with self._lock:
            self.calls.append((group_id, artifact_id, kind))
        raise VersionNotFoundError(f"{group_id}:{artifact_id} not found")


def find(el, path):
    """Find a descendant by a slash-separated path, with or without the POM namespace."""
    result = el.find("/".join(f"m:{p}" for p in path.split("/")), NS)
    if result is None:
        result = el.find(path)
    return result


def findall(el, path):
    result = el.findall("/".join(f"m:{p}" for p in path.split("/")), NS)
    return result or el.findall(path)


def text(el, tag):
    child = find(el, tag)
    return child.text.strip() if child is not None and child.text else None


def entries_by_artifact(el, path):
    """Map artifactId → element for every entry under ``path``."""
    return {text(entry, "artifactId"): entry for entry in findall(el, path)}


@pytest.fixture
def fake_lookup():
    return FakeLookup()


@pytest.fixture
def failing_lookup():
    return FailingLookup()


@pytest.fixture
def demo_request():
    """The basic request: com.example:demo with AssertJ."""
    return ProjectRequest(
        group_id="com.example",
        artifact_id="demo",
        version="1.0.0-SNAPSHOT",
        assertion_library=AssertionLibrary.ASSERTJ,
    )


@pytest.fixture
def full_request():
    """A request enabling every optional feature except the wrapper."""
    return ProjectRequest(
        group_id="org.acme.tools",
        artifact_id="my-cool-app",
        version="0.1.0",
        name="My Cool App",
        description="Does cool things",
        java_version="21",
        assertion_library=AssertionLibrary.HAMCREST,
        include_spotless=True,
        include_checkstyle=True,
    )


@pytest.fixture
def parse_pom():
    """Parse manifest text into an ElementTree root."""
    def _parse(xml_text):
        return ET.fromstring(xml_text)
    return _parse

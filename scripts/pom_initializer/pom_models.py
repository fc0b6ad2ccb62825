"""Data model classes for project generation.

Plain records for coordinates, requests, resolution results and the
in-memory manifest tree. No behavior beyond identity and small accessors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# Placeholder written in place of a version that could not be resolved.
FALLBACK_VERSION = "TODO"


class PackageKind(Enum):
    """What a coordinate is used as. Values are Maven artifact types."""

    NORMAL = "jar"
    BOM = "pom"
    PLUGIN = "maven-plugin"

    @property
    def extension(self) -> str:
        """File extension the artifact is published with."""
        # maven-plugin artifacts are packaged as jars
        return "jar" if self is PackageKind.PLUGIN else self.value


class AssertionLibrary(Enum):
    """Assertion library added to the generated test dependencies."""

    NONE = "none"
    ASSERTJ = "assertj"
    HAMCREST = "hamcrest"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "AssertionLibrary":
        """Case-insensitive lookup; ``None`` and unknown values map to NONE."""
        if value is None:
            return cls.NONE
        for library in cls:
            if library.value == value.strip().lower():
                return library
        return cls.NONE


@dataclass(frozen=True, eq=False)
class Coordinate:
    """A ``groupId:artifactId`` pair.

    Two coordinates are equal when group and artifact match, whatever their
    subclass, kind or version.
    """
    group_id: str
    artifact_id: str

    def _key(self):
        return (self.group_id, self.artifact_id)

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True, eq=False)
class ResolvableCoordinate(Coordinate):
    """A catalog coordinate whose version is looked up during a run.

    Attributes:
        kind: NORMAL dependency, BOM import, or PLUGIN.
        scope: Dependency scope written into ``<dependencies>`` (e.g. ``test``).
    """
    kind: PackageKind = PackageKind.NORMAL
    scope: Optional[str] = None


@dataclass(frozen=True)
class PluginExecution:
    """Goals bound to a plugin, and whether it gets a placeholder configuration."""
    goals: tuple
    placeholder_configuration: bool = False


@dataclass
class ResolvedVersions:
    """Versions produced by one resolution pass.

    Attributes:
        versions: Coordinate → resolved version (or the fallback sentinel).
        fallbacks: Coordinates whose lookup failed.
    """
    versions: dict = field(default_factory=dict)
    fallbacks: set = field(default_factory=set)

    def version_of(self, coordinate: Coordinate) -> Optional[str]:
        return self.versions.get(coordinate)

    def record(self, coordinate: Coordinate, version: str, used_fallback: bool):
        self.versions[coordinate] = version
        if used_fallback:
            self.fallbacks.add(coordinate)

    def merge(self, other: "ResolvedVersions") -> "ResolvedVersions":
        merged = ResolvedVersions(dict(self.versions), set(self.fallbacks))
        merged.versions.update(other.versions)
        merged.fallbacks |= other.fallbacks
        return merged

    @property
    def used_fallback(self) -> bool:
        return bool(self.fallbacks)


@dataclass
class ManifestNode:
    """One element of the build descriptor tree.

    Attributes:
        name: Element tag name.
        text: Text content, or ``None`` for container elements.
        children: Owned child nodes, in document order.
        comments: Comment strings emitted as the first children.
        attributes: Element attributes (only the root uses them).
    """
    name: str
    text: Optional[str] = None
    children: list = field(default_factory=list)
    comments: list = field(default_factory=list)
    attributes: dict = field(default_factory=dict)

    def child_text(self, name: str) -> Optional[str]:
        for child in self.children:
            if child.name == name:
                return child.text
        return None


@dataclass(frozen=True)
class ProjectRequest:
    """Everything a caller can ask for when generating a project."""
    group_id: str
    artifact_id: str
    version: str = "1.0.0-SNAPSHOT"
    name: Optional[str] = None
    description: Optional[str] = None
    java_version: str = "25"
    assertion_library: AssertionLibrary = AssertionLibrary.NONE
    include_spotless: bool = False
    include_checkstyle: bool = False
    include_maven_wrapper: bool = False

    @property
    def display_name(self) -> str:
        return self.name if self.name and self.name.strip() else self.artifact_id


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation run.

    Attributes:
        manifest_text: The formatted ``pom.xml`` content.
        used_fallback_version: ``True`` if any version lookup fell back.
        output_path: Project directory, or ``None`` for in-memory runs.
    """
    manifest_text: str
    used_fallback_version: bool
    output_path: Optional[str] = None

    @property
    def success(self) -> bool:
        return not self.used_fallback_version

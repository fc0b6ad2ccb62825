"""Maven project generation with a synthesized, version-resolved pom.xml."""

from .cli import main
from .generation_pipeline import ProjectGenerator, generate_project
from .manifest_formatter import format_xml
from .pom_models import AssertionLibrary, Coordinate, GenerationResult, PackageKind, ProjectRequest

__all__ = [
    "main", "ProjectGenerator", "generate_project", "format_xml",
    "AssertionLibrary", "Coordinate", "GenerationResult", "PackageKind", "ProjectRequest",
]

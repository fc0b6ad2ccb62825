"""End-to-end project generation.

Sequences one run: validate the request, build the catalog, resolve BOM
versions, resolve plugin (and explicit library) versions, construct and
format the manifest in memory, then write the project to disk in one go.
A run that fails after creating its directory removes it again.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from .config import GeneratorSettings
from .coordinate_catalog import build_dependencies, build_dependency_management, build_plugins
from .dependency_management import should_include_version
from .errors import ProjectGenerationError
from .manifest_builder import build_pom_document
from .manifest_formatter import format_xml
from .maven_central import MavenCentralLookup
from .maven_wrapper import add_maven_wrapper
from .pom_models import GenerationResult, ProjectRequest
from .project_structure import create_readme, create_structure
from .request_validation import validate_request
from .version_resolver import VersionLookup, VersionResolver

logger = logging.getLogger(__name__)

POM_FILE = "pom.xml"


def write_atomic(path: Path, content: str):
    """Write a UTF-8 file via a sibling temp file and an atomic rename."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


class ProjectGenerator:
    """Generates Maven project skeletons.

    One generator can serve many runs, including concurrent ones: every run
    builds its own catalog lists, resolution results and document.

    Args:
        lookup: Version lookup capability. Defaults to a ``MavenCentralLookup``
            configured from ``settings``.
        settings: Generator settings (defaults to ``GeneratorSettings()``).
    """

    def __init__(self, lookup: Optional[VersionLookup] = None,
                 settings: Optional[GeneratorSettings] = None):
        self.settings = settings or GeneratorSettings()
        if lookup is None:
            lookup = MavenCentralLookup(self.settings.repository_url, self.settings.timeout)
        self.resolver = VersionResolver(
            lookup,
            fallback=self.settings.fallback_version,
            max_workers=self.settings.max_workers,
        )

    def render_manifest(self, request: ProjectRequest) -> GenerationResult:
        """Build and format ``pom.xml`` for a request without touching the disk.

        Returns:
            A GenerationResult with ``output_path=None``.

        Raises:
            InvalidRequestError: Before any lookup, if the request is invalid.
            ProjectGenerationError: If the manifest cannot be built or formatted.
        """
        validate_request(request)
        fallback = self.settings.fallback_version
        try:
            plugins = build_plugins(request)
            management_set = build_dependency_management(request)
            dependencies = build_dependencies(request)

            bom_versions = self.resolver.resolve_all(management_set)
            explicit = [d for d in dependencies if should_include_version(d, management_set)]
            versions = bom_versions.merge(self.resolver.resolve_all(plugins + explicit))

            doc = build_pom_document(request, plugins, management_set, dependencies,
                                     versions, fallback)
            manifest = format_xml(doc.to_xml())
        except ProjectGenerationError:
            raise
        except Exception as exc:
            raise ProjectGenerationError(f"Failed to generate POM file: {exc}") from exc

        if versions.used_fallback:
            logger.warning("Fallback version %r used for: %s", fallback,
                           ", ".join(sorted(str(c) for c in versions.fallbacks)))
        return GenerationResult(manifest_text=manifest,
                                used_fallback_version=versions.used_fallback)

    def generate(self, request: ProjectRequest, output_dir: Optional[Path] = None) -> GenerationResult:
        """Generate a complete project directory.

        Args:
            request: What to generate.
            output_dir: Parent directory; the project goes to
                ``output_dir/<artifactId>``. A fresh temporary directory is
                used when omitted.

        Returns:
            A GenerationResult whose ``output_path`` is the project directory.

        Raises:
            InvalidRequestError: If the request is invalid (nothing is created).
            ProjectGenerationError: On any other failure (nothing is left behind).
        """
        logger.info("Starting project generation for: %s", request)
        rendered = self.render_manifest(request)

        project_dir = _create_project_dir(request, output_dir)
        try:
            create_structure(project_dir, request)
            write_atomic(project_dir / POM_FILE, rendered.manifest_text)
            if request.include_maven_wrapper:
                add_maven_wrapper(project_dir)
            create_readme(project_dir, request)
        except Exception as exc:
            shutil.rmtree(project_dir, ignore_errors=True)
            if isinstance(exc, ProjectGenerationError):
                raise
            raise ProjectGenerationError(f"Failed to write project: {exc}") from exc

        logger.info("Project generated successfully at: %s", project_dir)
        return GenerationResult(
            manifest_text=rendered.manifest_text,
            used_fallback_version=rendered.used_fallback_version,
            output_path=str(project_dir),
        )


def _create_project_dir(request: ProjectRequest, output_dir: Optional[Path]) -> Path:
    try:
        if output_dir is None:
            project_dir = Path(tempfile.mkdtemp(prefix=f"project-{request.artifact_id}-"))
        else:
            project_dir = Path(output_dir) / request.artifact_id
            if project_dir.exists():
                raise ProjectGenerationError(f"Directory already exists: {project_dir}")
            project_dir.mkdir(parents=True)
    except OSError as exc:
        raise ProjectGenerationError(f"Failed to create project directory: {exc}") from exc
    logger.debug("Created project directory at: %s", project_dir)
    return project_dir


def generate_project(
    request: ProjectRequest,
    output_dir: Optional[Path] = None,
    lookup: Optional[VersionLookup] = None,
    settings: Optional[GeneratorSettings] = None,
) -> GenerationResult:
    """Generate one project with a throwaway ``ProjectGenerator``."""
    return ProjectGenerator(lookup, settings).generate(request, output_dir)

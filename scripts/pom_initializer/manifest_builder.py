"""``pom.xml`` tree construction.

Turns a request, its catalog coordinates and the run's resolved versions
into a ``ManifestDocument``. Sections are written in a fixed order:
identity, properties, dependencyManagement, dependencies, build plugins,
then plugin executions. Construction is sequential and deterministic.
"""

from typing import Optional

from .coordinate_catalog import PLACEHOLDER_CONFIGURATION_COMMENT, plugin_execution
from .dependency_management import version_to_include
from .manifest_document import ManifestDocument, matches_coordinate
from .pom_models import (
    FALLBACK_VERSION,
    ManifestNode,
    PluginExecution,
    ProjectRequest,
    ResolvedVersions,
)

MODEL_VERSION = "4.0.0"
PACKAGING = "jar"
SOURCE_ENCODING = "UTF-8"


def add_project_identity(doc: ManifestDocument, request: ProjectRequest):
    """Write modelVersion, GAV, packaging, and the optional name/description."""
    root = doc.root
    doc.set_child_text(root, "modelVersion", MODEL_VERSION)
    doc.set_child_text(root, "groupId", request.group_id)
    doc.set_child_text(root, "artifactId", request.artifact_id)
    doc.set_child_text(root, "version", request.version)
    doc.set_child_text(root, "packaging", PACKAGING)
    if request.name and request.name.strip():
        doc.set_child_text(root, "name", request.name.strip())
    if request.description and request.description.strip():
        doc.set_child_text(root, "description", request.description.strip())


def add_properties(doc: ManifestDocument, request: ProjectRequest):
    props = doc.find_or_create_section(doc.root, "properties")
    doc.set_child_text(props, "maven.compiler.release", request.java_version)
    doc.set_child_text(props, "project.build.sourceEncoding", SOURCE_ENCODING)


def add_dependency_management(
    doc: ManifestDocument,
    management_set: list,
    versions: ResolvedVersions,
    fallback: str = FALLBACK_VERSION,
):
    """Write one ``type=pom, scope=import`` entry per BOM.

    BOM versions are always written; an unresolved one shows the fallback
    sentinel so it stays visible in the generated file.
    """
    if not management_set:
        return
    dm = doc.find_or_create_section(doc.root, "dependencyManagement")
    deps = doc.find_or_create_section(dm, "dependencies")
    for bom in management_set:
        doc.upsert_coordinate_entry(
            deps, "dependency", bom,
            version=versions.version_of(bom) or fallback,
            extra={"type": "pom", "scope": "import"},
        )


def add_dependencies(
    doc: ManifestDocument,
    dependencies: list,
    management_set: list,
    versions: ResolvedVersions,
    fallback: str = FALLBACK_VERSION,
):
    """Write ``<dependencies>``, omitting versions managed by a BOM or unresolved."""
    if not dependencies:
        return
    deps = doc.find_or_create_section(doc.root, "dependencies")
    for dep in dependencies:
        extra = {"scope": dep.scope} if dep.scope else None
        doc.upsert_coordinate_entry(
            deps, "dependency", dep,
            version=version_to_include(dep, management_set, versions, fallback),
            extra=extra,
        )


def add_plugins(
    doc: ManifestDocument,
    plugins: list,
    versions: ResolvedVersions,
    fallback: str = FALLBACK_VERSION,
):
    """Pin every plugin under ``<build><plugins>`` with its resolved version."""
    if not plugins:
        return
    build = doc.find_or_create_section(doc.root, "build")
    section = doc.find_or_create_section(build, "plugins")
    for plugin in plugins:
        doc.upsert_coordinate_entry(
            section, "plugin", plugin,
            version=versions.version_of(plugin) or fallback,
        )


def _set_goal(doc: ManifestDocument, goals: ManifestNode, goal: str):
    def _build(node: ManifestNode):
        node.text = goal
    doc.upsert_repeatable_entry(goals, "goal", lambda node: node.text == goal, _build)


def configure_plugin(
    doc: ManifestDocument,
    group_id: str,
    artifact_id: str,
    execution: PluginExecution,
) -> Optional[ManifestNode]:
    """Bind goals to an already-declared plugin.

    Adds one ``<execution>`` carrying the goals and, if requested, an empty
    ``<configuration>`` annotated with a placeholder comment. Running it
    again for the same plugin adds nothing.

    Returns:
        The plugin node, or ``None`` if the plugin is not declared.
    """
    section = doc.find_path("build", "plugins")
    if section is None:
        return None
    plugin = doc.find_entry(section, "plugin", matches_coordinate(group_id, artifact_id))
    if plugin is None:
        return None

    executions = doc.find_or_create_section(plugin, "executions")
    entry = doc.find_or_create_section(executions, "execution")
    goals = doc.find_or_create_section(entry, "goals")
    for goal in execution.goals:
        _set_goal(doc, goals, goal)

    if execution.placeholder_configuration and doc.find_child(plugin, "configuration") is None:
        configuration = doc.insert_child(plugin, "configuration")
        doc.add_comment(configuration, PLACEHOLDER_CONFIGURATION_COMMENT)
    return plugin


def configure_plugins(doc: ManifestDocument, plugins: list):
    for plugin in plugins:
        execution = plugin_execution(plugin.group_id, plugin.artifact_id)
        if execution is not None:
            configure_plugin(doc, plugin.group_id, plugin.artifact_id, execution)


def build_pom_document(
    request: ProjectRequest,
    plugins: list,
    management_set: list,
    dependencies: list,
    versions: ResolvedVersions,
    fallback: str = FALLBACK_VERSION,
) -> ManifestDocument:
    """Build the complete manifest tree for one run.

    Args:
        request: The validated project request.
        plugins: Plugin coordinates, in output order.
        management_set: BOM coordinates, in output order.
        dependencies: Dependency coordinates, in output order.
        versions: Resolution results covering every coordinate above.
        fallback: The sentinel that marks a failed lookup.

    Returns:
        A new document rooted at ``<project>``.
    """
    doc = ManifestDocument.create_pom()
    add_project_identity(doc, request)
    add_properties(doc, request)
    add_dependency_management(doc, management_set, versions, fallback)
    add_dependencies(doc, dependencies, management_set, versions, fallback)
    add_plugins(doc, plugins, versions, fallback)
    configure_plugins(doc, plugins)
    return doc

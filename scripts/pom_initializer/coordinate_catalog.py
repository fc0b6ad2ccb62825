"""Curated coordinates every generated project starts from.

Pure tables and list builders with no I/O. The builders return fresh lists on
every call so a run can never mutate another run's catalog. They do not
deduplicate: a coordinate listed twice is emitted twice unless written
through an upsert.
"""

from .pom_models import (
    AssertionLibrary,
    PackageKind,
    PluginExecution,
    ProjectRequest,
    ResolvableCoordinate,
)

MAVEN_PLUGINS_GROUP = "org.apache.maven.plugins"

# Build plugins pinned in every project, in output order.
DEFAULT_PLUGINS = (
    (MAVEN_PLUGINS_GROUP, "maven-clean-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-compiler-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-resources-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-surefire-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-jar-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-install-plugin"),
    (MAVEN_PLUGINS_GROUP, "maven-deploy-plugin"),
    ("org.jacoco", "jacoco-maven-plugin"),
)

SPOTLESS_PLUGIN = ("com.diffplug.spotless", "spotless-maven-plugin")
CHECKSTYLE_PLUGIN = (MAVEN_PLUGINS_GROUP, "maven-checkstyle-plugin")

JUNIT_BOM = ("org.junit", "junit-bom")
ASSERTJ_BOM = ("org.assertj", "assertj-bom")

JUNIT_JUPITER = ("org.junit.jupiter", "junit-jupiter")

# Assertion library → test dependency it adds.
ASSERTION_DEPENDENCIES = {
    AssertionLibrary.ASSERTJ: ("org.assertj", "assertj-core"),
    AssertionLibrary.HAMCREST: ("org.hamcrest", "hamcrest"),
}

# Assertion library → BOM it imports. Hamcrest ships no BOM, so its
# dependency carries an explicit version.
ASSERTION_BOMS = {
    AssertionLibrary.ASSERTJ: ASSERTJ_BOM,
}

# (groupId, artifactId) → executions written under the plugin.
PLUGIN_EXECUTIONS = {
    ("org.jacoco", "jacoco-maven-plugin"): PluginExecution(goals=("prepare-agent", "report")),
    SPOTLESS_PLUGIN: PluginExecution(goals=("check",), placeholder_configuration=True),
    CHECKSTYLE_PLUGIN: PluginExecution(goals=("check",), placeholder_configuration=True),
}

PLACEHOLDER_CONFIGURATION_COMMENT = "TODO: Please add a configuration"


def build_plugins(request: ProjectRequest) -> list:
    """Return the plugin coordinates for a request: defaults, then formatters."""
    pairs = list(DEFAULT_PLUGINS)
    if request.include_spotless:
        pairs.append(SPOTLESS_PLUGIN)
    if request.include_checkstyle:
        pairs.append(CHECKSTYLE_PLUGIN)
    return [ResolvableCoordinate(g, a, kind=PackageKind.PLUGIN) for g, a in pairs]


def build_dependency_management(request: ProjectRequest) -> list:
    """Return the BOM imports (the management set) for a request."""
    pairs = [JUNIT_BOM]
    bom = ASSERTION_BOMS.get(request.assertion_library)
    if bom:
        pairs.append(bom)
    return [ResolvableCoordinate(g, a, kind=PackageKind.BOM, scope="import") for g, a in pairs]


def build_dependencies(request: ProjectRequest) -> list:
    """Return the test dependencies for a request: JUnit, then the assertion library."""
    pairs = [JUNIT_JUPITER]
    extra = ASSERTION_DEPENDENCIES.get(request.assertion_library)
    if extra:
        pairs.append(extra)
    return [ResolvableCoordinate(g, a, kind=PackageKind.NORMAL, scope="test") for g, a in pairs]


def plugin_execution(group_id: str, artifact_id: str):
    """Return the PluginExecution configured for a plugin, or ``None``."""
    return PLUGIN_EXECUTIONS.get((group_id, artifact_id))

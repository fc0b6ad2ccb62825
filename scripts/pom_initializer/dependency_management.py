"""BOM coverage rules.

Decides, for each dependency, whether ``<dependencies>`` must carry an
explicit ``<version>`` or whether an imported BOM already manages it.
"""

from typing import Optional

from .pom_models import FALLBACK_VERSION, Coordinate, PackageKind, ResolvedVersions

# A BOM with exactly this groupId also manages every group starting with it
# (org.junit.jupiter, org.junit.platform, ...). Nothing else gets prefix matching.
JUNIT_GROUP = "org.junit"


def bom_covers(bom: Coordinate, dependency: Coordinate) -> bool:
    """Check whether a BOM import manages the version of a dependency.

    Args:
        bom: A BOM coordinate from the management set.
        dependency: The dependency to check.

    Returns:
        ``True`` if the groupIds are equal, or if the BOM group is exactly
        ``org.junit`` and the dependency group starts with ``org.junit``.
    """
    if bom.group_id == dependency.group_id:
        return True
    return bom.group_id == JUNIT_GROUP and dependency.group_id.startswith(JUNIT_GROUP)


def is_covered(dependency: Coordinate, management_set: list) -> bool:
    """Return ``True`` if any BOM in the management set covers the dependency."""
    return any(bom_covers(bom, dependency) for bom in management_set)


def should_include_version(dependency: Coordinate, management_set: list) -> bool:
    """Return whether ``<dependencies>`` needs an explicit version for this entry.

    BOM imports never do; NORMAL dependencies only when no BOM covers them.
    """
    if getattr(dependency, "kind", PackageKind.NORMAL) is PackageKind.BOM:
        return False
    return not is_covered(dependency, management_set)


def usable_version(version: Optional[str], fallback: str = FALLBACK_VERSION) -> Optional[str]:
    """Return the version, or ``None`` if it is empty or the fallback sentinel."""
    if not version or not version.strip() or version == fallback:
        return None
    return version


def version_to_include(
    dependency: Coordinate,
    management_set: list,
    versions: ResolvedVersions,
    fallback: str = FALLBACK_VERSION,
) -> Optional[str]:
    """Return the explicit version to write for a dependency, or ``None``.

    Args:
        dependency: The dependency being written.
        management_set: BOM coordinates imported by the manifest.
        versions: Resolution results for the current run.
        fallback: The sentinel that marks a failed lookup.

    Returns:
        The resolved version if one must be written, ``None`` if a BOM covers
        the dependency or the lookup produced nothing usable.
    """
    if not should_include_version(dependency, management_set):
        return None
    return usable_version(versions.version_of(dependency), fallback)

"""Tests for dependency_management.py — BOM coverage and version suppression."""

from pom_initializer.dependency_management import (
    bom_covers,
    is_covered,
    should_include_version,
    usable_version,
    version_to_include,
)
from pom_initializer.pom_models import PackageKind, ResolvableCoordinate, ResolvedVersions


def _bom(group_id, artifact_id):
    return ResolvableCoordinate(group_id, artifact_id, kind=PackageKind.BOM, scope="import")


def _dep(group_id, artifact_id):
    return ResolvableCoordinate(group_id, artifact_id, scope="test")


JUNIT_BOM = _bom("org.junit", "junit-bom")
ASSERTJ_BOM = _bom("org.assertj", "assertj-bom")


class TestBomCovers:
    def test_same_group(self):
        assert bom_covers(ASSERTJ_BOM, _dep("org.assertj", "assertj-core"))

    def test_junit_prefix(self):
        assert bom_covers(JUNIT_BOM, _dep("org.junit.jupiter", "junit-jupiter"))
        assert bom_covers(JUNIT_BOM, _dep("org.junit.platform", "junit-platform-launcher"))

    def test_unrelated_group(self):
        assert not bom_covers(JUNIT_BOM, _dep("org.other.thing", "x"))

    def test_prefix_rule_only_for_junit(self):
        # org.assertj.extra starts with org.assertj, but only org.junit gets prefix matching
        assert not bom_covers(ASSERTJ_BOM, _dep("org.assertj.extra", "x"))

    def test_prefix_rule_needs_exact_junit_bom_group(self):
        assert not bom_covers(_bom("org.junit.jupiter", "x-bom"), _dep("org.junit.platform", "y"))


class TestIsCovered:
    def test_any_bom(self):
        assert is_covered(_dep("org.assertj", "assertj-core"), [JUNIT_BOM, ASSERTJ_BOM])

    def test_empty_management_set(self):
        assert not is_covered(_dep("org.junit.jupiter", "junit-jupiter"), [])


class TestShouldIncludeVersion:
    def test_covered_dependency_omits_version(self):
        assert not should_include_version(_dep("org.junit.jupiter", "junit-jupiter"), [JUNIT_BOM])

    def test_uncovered_dependency_keeps_version(self):
        assert should_include_version(_dep("org.hamcrest", "hamcrest"), [JUNIT_BOM])

    def test_bom_kind_never_includes(self):
        assert not should_include_version(_bom("org.other", "other-bom"), [])


class TestUsableVersion:
    def test_real_version(self):
        assert usable_version("3.0") == "3.0"

    def test_fallback_and_empty(self):
        assert usable_version("TODO") is None
        assert usable_version("") is None
        assert usable_version("   ") is None
        assert usable_version(None) is None

    def test_custom_fallback(self):
        assert usable_version("TODO", fallback="UNKNOWN") == "TODO"
        assert usable_version("UNKNOWN", fallback="UNKNOWN") is None


class TestVersionToInclude:
    def test_resolved_uncovered(self):
        dep = _dep("org.hamcrest", "hamcrest")
        versions = ResolvedVersions()
        versions.record(dep, "3.0", False)
        assert version_to_include(dep, [JUNIT_BOM], versions) == "3.0"

    def test_fallback_suppressed(self):
        dep = _dep("org.hamcrest", "hamcrest")
        versions = ResolvedVersions()
        versions.record(dep, "TODO", True)
        assert version_to_include(dep, [JUNIT_BOM], versions) is None

    def test_covered_ignores_resolved(self):
        dep = _dep("org.junit.jupiter", "junit-jupiter")
        versions = ResolvedVersions()
        versions.record(dep, "6.0.0", False)
        assert version_to_include(dep, [JUNIT_BOM], versions) is None

    def test_unresolved_uncovered(self):
        assert version_to_include(_dep("org.hamcrest", "hamcrest"), [], ResolvedVersions()) is None

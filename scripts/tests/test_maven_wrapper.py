"""Tests for maven_wrapper.py — the mvn invocation is stubbed out."""

import subprocess

import pytest

from pom_initializer import maven_wrapper
from pom_initializer.errors import ProjectGenerationError
from pom_initializer.maven_wrapper import MAVEN_WRAPPER_PLUGIN_GOAL, add_maven_wrapper


class TestAddMavenWrapper:
    def test_runs_wrapper_goal(self, tmp_path, monkeypatch):
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            seen["cwd"] = kwargs["cwd"]
            return subprocess.CompletedProcess(cmd, 0, stdout="[INFO] BUILD SUCCESS\n")

        monkeypatch.setattr(maven_wrapper.subprocess, "run", fake_run)
        add_maven_wrapper(tmp_path)
        assert seen["cmd"] == ["mvn", "-N", MAVEN_WRAPPER_PLUGIN_GOAL]
        assert seen["cwd"] == tmp_path
        assert MAVEN_WRAPPER_PLUGIN_GOAL.endswith("maven-wrapper-plugin:3.3.4:wrapper")

    def test_nonzero_exit(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            maven_wrapper.subprocess, "run",
            lambda cmd, **kw: subprocess.CompletedProcess(cmd, 1, stdout="[ERROR] boom\n"),
        )
        with pytest.raises(ProjectGenerationError, match="Exit code: 1"):
            add_maven_wrapper(tmp_path)

    def test_mvn_missing(self, tmp_path):
        with pytest.raises(ProjectGenerationError, match="Failed to execute"):
            add_maven_wrapper(tmp_path, mvn=str(tmp_path / "no-such-mvn"))

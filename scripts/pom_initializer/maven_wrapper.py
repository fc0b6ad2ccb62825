"""Maven Wrapper installation via the maven-wrapper-plugin."""

import logging
import subprocess
from pathlib import Path

from .errors import ProjectGenerationError

logger = logging.getLogger(__name__)

MAVEN_WRAPPER_PLUGIN_VERSION = "3.3.4"
MAVEN_WRAPPER_PLUGIN_GOAL = (
    f"org.apache.maven.plugins:maven-wrapper-plugin:{MAVEN_WRAPPER_PLUGIN_VERSION}:wrapper"
)


def add_maven_wrapper(project_dir: Path, mvn: str = "mvn"):
    """Generate ``mvnw``, ``mvnw.cmd`` and ``.mvn/wrapper`` in a project.

    Args:
        project_dir: Project root containing ``pom.xml``.
        mvn: Maven executable to run.

    Raises:
        ProjectGenerationError: If Maven is missing or the plugin fails.
    """
    logger.info("Adding Maven Wrapper to project at: %s", project_dir)
    try:
        proc = subprocess.run(
            [mvn, "-N", MAVEN_WRAPPER_PLUGIN_GOAL],
            cwd=project_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as exc:
        raise ProjectGenerationError(f"Failed to execute Maven Wrapper Plugin: {exc}") from exc

    for line in proc.stdout.splitlines():
        logger.debug("Maven Wrapper Plugin: %s", line)
    if proc.returncode != 0:
        raise ProjectGenerationError(
            f"Failed to generate Maven Wrapper. Exit code: {proc.returncode}\nOutput: {proc.stdout}"
        )
    logger.info("Maven Wrapper added successfully")

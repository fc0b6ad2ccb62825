"""Source tree, stub classes, ``.gitignore`` and ``README.md`` for a new project."""

import logging
from pathlib import Path

from .pom_models import ProjectRequest

logger = logging.getLogger(__name__)

GITIGNORE = """\
target/
pom.xml.tag
pom.xml.releaseBackup
pom.xml.versionsBackup
pom.xml.next
release.properties
dependency-reduced-pom.xml
buildNumber.properties
"""

MAIN_CLASS_TEMPLATE = """\
package {package};

/**
 * {description}
 */
public class {class_name} {{
    public static void main(String[] args) {{
        System.out.println("Hello, {class_name}!");
    }}
}}
"""

TEST_CLASS_TEMPLATE = """\
package {package};

import org.junit.jupiter.api.Test;
import static org.junit.jupiter.api.Assertions.assertTrue;

class {class_name}Test {{
    @Test
    void contextLoads() {{
        assertTrue(true);
    }}
}}
"""

# Plugin flag → README section describing it.
FORMATTING_PLUGIN_DOCS = {
    "include_spotless": (
        "Spotless Maven Plugin",
        "https://github.com/diffplug/spotless/tree/main/plugin-maven",
        "code style preferences",
    ),
    "include_checkstyle": (
        "Maven Checkstyle Plugin",
        "https://maven.apache.org/plugins/maven-checkstyle-plugin/",
        "coding standards",
    ),
}


def to_class_name(artifact_id: str) -> str:
    """Convert an artifactId into a Java class name.

    ``my-cool-app`` → ``MyCoolApp``. Names that would not start with a letter
    are prefixed with ``Project`` (``1st-app`` → ``Project1stApp``).
    """
    name = "".join(part[:1].upper() + part[1:] for part in artifact_id.split("-") if part)
    if not name or not name[0].isalpha():
        name = "Project" + name
    return name


def package_path(group_id: str) -> Path:
    return Path(*group_id.split("."))


def render_main_class(request: ProjectRequest) -> str:
    return MAIN_CLASS_TEMPLATE.format(
        package=request.group_id,
        description=request.description or "Generated Maven Project",
        class_name=to_class_name(request.artifact_id),
    )


def render_test_class(request: ProjectRequest) -> str:
    return TEST_CLASS_TEMPLATE.format(
        package=request.group_id,
        class_name=to_class_name(request.artifact_id),
    )


def render_readme(request: ProjectRequest) -> str:
    """Build README.md: prerequisites, build instructions, formatting plugin notes."""
    lines = [
        f"# {request.display_name}",
        "",
        "## Prerequisites",
        "",
        f"*   **Java SDK**: Version {request.java_version} or higher",
    ]
    if not request.include_maven_wrapper:
        lines.append("*   **Maven**: Version 3.9.x or higher")
    lines += [
        "",
        "## Build Instructions",
        "",
        "This project uses Maven for dependency management and building.",
        "",
        "To build the project and run tests, use the following command:",
        "",
    ]
    if request.include_maven_wrapper:
        lines += [
            "On Windows:",
            "",
            "```shell",
            ".\\mvnw.cmd verify",
            "```",
            "",
            "On Mac/Linux:",
            "",
            "```shell",
            "./mvnw verify",
            "```",
        ]
    else:
        lines += ["```shell", "mvn verify", "```"]

    selected = [doc for flag, doc in FORMATTING_PLUGIN_DOCS.items() if getattr(request, flag)]
    if selected:
        lines += ["", "## Code Formatting Plugins"]
        for title, url, topic in selected:
            lines += [
                "",
                f"### {title}",
                "",
                f"This project includes the [{title}]({url}).",
                f"Please configure the plugin according to your {topic}.",
                f"See the [{title} documentation]({url}) for configuration options.",
            ]
    lines.append("")
    return "\n".join(lines)


def create_structure(project_dir: Path, request: ProjectRequest):
    """Create source directories, stub classes and ``.gitignore``.

    Args:
        project_dir: Existing project root directory.
        request: The validated project request.

    Raises:
        OSError: If a directory or file cannot be written.
    """
    pkg = package_path(request.group_id)
    main_dir = project_dir / "src" / "main" / "java" / pkg
    test_dir = project_dir / "src" / "test" / "java" / pkg
    main_dir.mkdir(parents=True, exist_ok=True)
    test_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Created directory structure for package: %s", pkg)

    class_name = to_class_name(request.artifact_id)
    (project_dir / ".gitignore").write_text(GITIGNORE, encoding="utf-8")
    (main_dir / f"{class_name}.java").write_text(render_main_class(request), encoding="utf-8")
    (test_dir / f"{class_name}Test.java").write_text(render_test_class(request), encoding="utf-8")
    logger.info("Created project structure for %s", request.artifact_id)


def create_readme(project_dir: Path, request: ProjectRequest):
    (project_dir / "README.md").write_text(render_readme(request), encoding="utf-8")
    logger.debug("Created README.md")

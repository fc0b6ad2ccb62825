"""CLI entry point for project generation.

Parses arguments into a ``ProjectRequest``, runs the generator and reports
the outcome. ``--dry-run`` prints the generated ``pom.xml`` only.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import GeneratorSettings
from .errors import InvalidRequestError, ProjectGenerationError
from .generation_pipeline import ProjectGenerator
from .pom_models import AssertionLibrary, ProjectRequest
from .project_zipper import create_project_zip


def _positive_seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a number, got {value!r}") from None
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value!r}")
    return seconds


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pom-init",
        description="Generate a Maven project skeleton with an up-to-date pom.xml",
    )
    parser.add_argument("group_id", help="Maven groupId (also the Java package)")
    parser.add_argument("artifact_id", help="Maven artifactId (lowercase, hyphens allowed)")
    parser.add_argument("--version", dest="project_version", default="1.0.0-SNAPSHOT",
                        help="Project version (default: 1.0.0-SNAPSHOT)")
    parser.add_argument("--name", default=None, help="Human-readable project name")
    parser.add_argument("--description", default=None, help="Project description")
    parser.add_argument("--java-version", default="25", help="maven.compiler.release (default: 25)")
    parser.add_argument(
        "--assertion-library", "-a",
        choices=[lib.value for lib in AssertionLibrary], default=AssertionLibrary.NONE.value,
        help="Assertion library for tests (default: none)",
    )
    parser.add_argument("--spotless", action="store_true", help="Add the Spotless plugin")
    parser.add_argument("--checkstyle", action="store_true", help="Add the Checkstyle plugin")
    parser.add_argument("--wrapper", action="store_true", help="Add the Maven Wrapper (needs mvn)")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Parent directory for the project (default: a temp directory)")
    parser.add_argument("--zip", type=Path, default=None, help="Also write the project as a ZIP file")
    parser.add_argument("--dry-run", "-n", action="store_true",
                        help="Print pom.xml without writing files")
    parser.add_argument("--repository-url", default=None, help="Maven repository to query")
    parser.add_argument("--timeout", type=_positive_seconds, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def request_from_args(args: argparse.Namespace) -> ProjectRequest:
    return ProjectRequest(
        group_id=args.group_id,
        artifact_id=args.artifact_id,
        version=args.project_version,
        name=args.name,
        description=args.description,
        java_version=args.java_version,
        assertion_library=AssertionLibrary.from_value(args.assertion_library),
        include_spotless=args.spotless,
        include_checkstyle=args.checkstyle,
        include_maven_wrapper=args.wrapper,
    )


def settings_from_args(args: argparse.Namespace) -> GeneratorSettings:
    settings = GeneratorSettings.from_env()
    overrides = {}
    if args.repository_url:
        overrides["repository_url"] = args.repository_url.rstrip("/")
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    return replace(settings, **overrides)


def run(args: argparse.Namespace, generator: Optional[ProjectGenerator] = None) -> int:
    """Execute a parsed command line. Returns the process exit code."""
    request = request_from_args(args)
    try:
        if generator is None:
            generator = ProjectGenerator(settings=settings_from_args(args))
        if args.dry_run:
            result = generator.render_manifest(request)
            print(result.manifest_text, end="")
        else:
            result = generator.generate(request, args.output)
            print(f"  ✓ {Path(result.output_path) / 'pom.xml'}")
            if args.zip:
                args.zip.parent.mkdir(parents=True, exist_ok=True)
                args.zip.write_bytes(create_project_zip(Path(result.output_path)))
                print(f"  ✓ {args.zip}")
    except InvalidRequestError as exc:
        for field_name, message in exc.errors.items():
            print(f"ERROR: {field_name}: {message}", file=sys.stderr)
        return 2
    except (ProjectGenerationError, ValueError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if result.used_fallback_version:
        print(f"WARNING: Some versions could not be resolved and were written as "
              f"'{generator.settings.fallback_version}'; fix them before building",
              file=sys.stderr)
    if not args.dry_run:
        print(f"\n✅ Project generated in: {result.output_path}")
        print("\n⚠️  Next steps:")
        print(f"  1. cd {result.output_path}")
        print("  2. Run: ./mvnw verify" if request.include_maven_wrapper else "  2. Run: mvn verify")
    return 0


def main(argv: Optional[list] = None):
    """CLI entry point. Parses arguments and delegates to ``run()``."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))

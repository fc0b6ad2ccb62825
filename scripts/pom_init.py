#!/usr/bin/env python3
"""Generate a Maven project skeleton with an up-to-date pom.xml.

Resolves the newest stable versions of the default plugins, BOMs and test
dependencies from a Maven repository and writes a ready-to-build project.

Generated files:
    - pom.xml                        — formatted build descriptor
    - src/main/java/<package>/...    — main class stub
    - src/test/java/<package>/...    — JUnit test stub
    - README.md, .gitignore
    - mvnw, mvnw.cmd, .mvn/wrapper   — only with --wrapper

Usage:
    python pom_init.py <groupId> <artifactId> [--assertion-library assertj] [--spotless]
    python pom_init.py <groupId> <artifactId> --dry-run

Versions that cannot be resolved are written as TODO and reported as a
warning; the project is still generated.
"""

from pom_initializer.cli import main

if __name__ == "__main__":
    main()

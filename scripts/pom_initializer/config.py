"""Generator configuration.

Defaults live on the dataclass; environment variables override them:

    POM_INIT_REPOSITORY_URL  — Maven repository to query (default Maven Central)
    POM_INIT_TIMEOUT         — HTTP timeout in seconds
    POM_INIT_MAX_WORKERS     — parallel version lookups per run
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from .pom_models import FALLBACK_VERSION

DEFAULT_REPOSITORY_URL = "https://repo.maven.apache.org/maven2"


@dataclass(frozen=True)
class GeneratorSettings:
    """Settings shared by every generation run of one generator."""

    repository_url: str = DEFAULT_REPOSITORY_URL
    timeout: float = 10.0
    max_workers: int = 4
    fallback_version: str = FALLBACK_VERSION

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "GeneratorSettings":
        """Build settings from ``POM_INIT_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            Settings with any present variables applied over the defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed or is not positive.
        """
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get("POM_INIT_REPOSITORY_URL"):
            settings = replace(settings, repository_url=env["POM_INIT_REPOSITORY_URL"].rstrip("/"))
        if env.get("POM_INIT_TIMEOUT"):
            settings = replace(settings, timeout=_positive(float, "POM_INIT_TIMEOUT", env))
        if env.get("POM_INIT_MAX_WORKERS"):
            settings = replace(settings, max_workers=_positive(int, "POM_INIT_MAX_WORKERS", env))
        return settings


def _positive(kind, name: str, env) -> float:
    try:
        value = kind(env[name])
    except ValueError:
        raise ValueError(f"{name} must be a number, got {env[name]!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {env[name]!r}")
    return value

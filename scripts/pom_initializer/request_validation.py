"""Request validation, run before any version lookup."""

import re

from .errors import InvalidRequestError
from .pom_models import AssertionLibrary, ProjectRequest

ARTIFACT_ID_PATTERN = re.compile(r"^[a-z][a-z0-9-]*[a-z0-9]$")
# Dot-separated Java identifiers; the groupId doubles as the source package.
GROUP_ID_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")
JAVA_VERSION_PATTERN = re.compile(r"^\d+$")


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def request_errors(request: ProjectRequest) -> dict:
    """Return a field → message mapping of everything wrong with a request."""
    errors = {}
    if _blank(request.group_id):
        errors["group_id"] = "GroupId is mandatory"
    elif not GROUP_ID_PATTERN.match(request.group_id):
        errors["group_id"] = "GroupId must be dot-separated Java identifiers (e.g. com.example)"

    if _blank(request.artifact_id):
        errors["artifact_id"] = "ArtifactId is mandatory"
    elif not ARTIFACT_ID_PATTERN.match(request.artifact_id):
        errors["artifact_id"] = (
            "ArtifactId must start with a lowercase letter, contain only lowercase letters, "
            "numbers, and hyphens, and end with a lowercase letter or number"
        )

    if _blank(request.version):
        errors["version"] = "Version is mandatory"

    if _blank(request.java_version):
        errors["java_version"] = "Java version is mandatory"
    elif not JAVA_VERSION_PATTERN.match(request.java_version):
        errors["java_version"] = "Java version must be a number (e.g. 21)"

    if not isinstance(request.assertion_library, AssertionLibrary):
        errors["assertion_library"] = "Unknown assertion library"
    return errors


def validate_request(request: ProjectRequest) -> ProjectRequest:
    """Return the request unchanged, or raise ``InvalidRequestError``."""
    if request is None:
        raise InvalidRequestError({"request": "Request cannot be empty"})
    errors = request_errors(request)
    if errors:
        raise InvalidRequestError(errors)
    return request

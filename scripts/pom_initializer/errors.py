"""Exception hierarchy for project generation.

Lookup failures (``ResolutionFailure`` and subclasses) are recoverable and
never leave the version resolver. Everything else surfaces to the caller.
"""


class ProjectGenerationError(Exception):
    """A generation run failed; no project output is left behind."""


class InvalidRequestError(ProjectGenerationError):
    """The request carries missing or invalid coordinate fields.

    Attributes:
        errors: Mapping of field name to a human-readable message.
    """

    def __init__(self, errors: dict):
        self.errors = dict(errors)
        details = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(f"Validation failed: {details}")


class MalformedInputError(ProjectGenerationError):
    """The formatter was handed text that is not well-formed XML."""


class ResolutionFailure(Exception):
    """A single version lookup failed."""


class VersionNotFoundError(ResolutionFailure):
    """The repository has no acceptable version for the coordinate."""


class TransientLookupError(ResolutionFailure):
    """The repository could not be queried (network, HTTP, bad metadata)."""

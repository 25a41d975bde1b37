"""Error hierarchy for deltaindex.

Error layers:
- DeltaIndexError: Base class for all deltaindex errors
- DomainError: Misuse of the delta API or invalid declarations
- InfrastructureError: Failures of collaborators (change detection, rebuild executor)

Nothing in the core retries or suppresses these; every error surfaces to the
immediate caller.
"""


class DeltaIndexError(Exception):
    """Base class for all deltaindex errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(DeltaIndexError):
    """Base class for domain errors."""


class ValidationError(DomainError):
    """An index declaration is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(DeltaIndexError):
    """Base class for infrastructure/collaborator errors."""


class ConfigurationError(InfrastructureError):
    """No index definition is resolvable for a record type, or config is invalid."""


class ChangeDetectionError(InfrastructureError):
    """The change oracle could not decide whether a value changed."""


class ExternalServiceError(InfrastructureError):
    """An external service failed or is unavailable."""


class RebuildError(ExternalServiceError):
    """The rebuild executor failed to trigger an index rebuild."""

    def __init__(self, message: str, index: str | None = None) -> None:
        super().__init__(message, code="REBUILD_FAILED")
        self.index = index

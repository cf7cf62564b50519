"""Custom exception classes for the catalog API."""


class CatalogError(Exception):
    """Base exception for the catalog."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CatalogError):
    """Request validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(CatalogError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(CatalogError):
    """Authentication required or token invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(CatalogError):
    """Insufficient permissions."""

    def __init__(self, message: str = "Insufficient scope"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(CatalogError):
    """Resource state conflict."""

    def __init__(self, message: str, details=None):
        super().__init__("CONFLICT", message, details, status_code=409)


class MalformedDocumentError(CatalogError):
    """Import document is not parseable or does not have the document structure."""

    def __init__(self, message: str, details=None):
        super().__init__("MALFORMED_DOCUMENT", message, details, status_code=422)


class ImportValidationError(CatalogError):
    """Import document failed validation; carries every detected problem."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            "IMPORT_VALIDATION_FAILED",
            f"Import document has {len(self.errors)} validation error(s)",
            {"errors": self.errors},
            status_code=409,
        )


class MaterializationError(CatalogError):
    """Import stopped part way through creating entities.

    ``created`` lists the entities that were committed before the failure and
    were not rolled back.
    """

    def __init__(self, message: str, created: list[dict] | None = None):
        self.created = list(created or [])
        super().__init__(
            "IMPORT_FAILED",
            message,
            {"errors": [message], "created": self.created},
            status_code=409,
        )


class SchemaCompilationError(Exception):
    """JSON Schema text does not compile."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedURIError(Exception):
    """Resource reference string is not a valid resource URI."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(reason)

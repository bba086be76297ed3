from typing import Optional


class CatalogError(Exception):
    code = "internal_error"
    message = "Internal server error"
    status_code = 500

    def __init__(self, message: str | None = None, details=None, code: str | None = None):
        self.message = message or self.message
        self.details = details
        if code:
            self.code = code
        super().__init__(self.message)


class ValidationError(CatalogError):
    code = "validation_error"
    message = "Invalid request parameters"
    status_code = 400


class ConfigurationError(CatalogError):
    code = "configuration_error"
    message = "Required deployment configuration is missing"
    status_code = 503


class UpstreamError(CatalogError):
    """
    A third-party catalog answered with a non-success status, an unreadable
    body, or could not be reached at all (upstream_status is None then).
    """
    code = "upstream_error"
    message = "Upstream catalog request failed"
    status_code = 502

    def __init__(self, message: str | None = None, upstream_status: Optional[int] = None, details=None):
        self.upstream_status = upstream_status
        super().__init__(message, details=details)


class NotFoundError(CatalogError):
    code = "not_found"
    message = "Endpoint not found"
    status_code = 404


class MethodError(CatalogError):
    code = "method_not_allowed"
    message = "Only GET method is allowed"
    status_code = 405


class InternalError(CatalogError):
    pass

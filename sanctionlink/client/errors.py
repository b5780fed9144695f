"""Error taxonomy for OpenSanctions API failures."""


class SanctionsAPIError(Exception):
    """Base class for every failure raised by the API client."""

    kind = "unknown"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidRequestError(SanctionsAPIError):
    kind = "invalid_request"


class InvalidCredentialError(SanctionsAPIError):
    kind = "invalid_credential"


class ForbiddenError(SanctionsAPIError):
    kind = "forbidden"


class NotFoundError(SanctionsAPIError):
    kind = "not_found"


class RateLimitedError(SanctionsAPIError):
    kind = "rate_limited"


class UpstreamFailureError(SanctionsAPIError):
    kind = "upstream_failure"


class NetworkUnreachableError(SanctionsAPIError):
    kind = "network_unreachable"


class UnknownFailureError(SanctionsAPIError):
    kind = "unknown"


_STATUS_ERRORS: dict[int, tuple[type[SanctionsAPIError], str]] = {
    400: (InvalidRequestError, "Invalid request: {detail}"),
    401: (InvalidCredentialError, "API key is invalid. Please check your settings."),
    403: (ForbiddenError, "Access denied. Please check your API key permissions."),
    404: (NotFoundError, "Entity not found in OpenSanctions database."),
    429: (RateLimitedError, "Rate limit exceeded. Please wait and try again."),
    500: (UpstreamFailureError, "OpenSanctions server error. Please try again later."),
}


def error_for_status(status_code: int, detail: str = "Unknown error") -> SanctionsAPIError:
    """Map an HTTP status code to the matching taxonomy error.

    Args:
        status_code: HTTP status of the failed response
        detail: Error detail extracted from the response body

    Returns:
        Error instance ready to be raised
    """
    error_cls, template = _STATUS_ERRORS.get(
        status_code, (UnknownFailureError, "Request failed ({status}): {detail}")
    )
    return error_cls(template.format(status=status_code, detail=detail), status_code=status_code)

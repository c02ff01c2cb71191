"""
Custom exception classes and error handling.

Every error the API returns on purpose is an APIException subclass. The
handler registered in main.py renders them as
``{"error": ..., "code": ..., **extra}``.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or "ERROR"
        self.extra = extra or {}

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.detail, "code": self.error_code}
        body.update(self.extra)
        return body


class AuthenticationRequired(APIException):
    """Authentication required."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationError(APIException):
    """Malformed or oversized client input."""

    def __init__(self, detail: str, field: Optional[str] = None, details: Optional[list] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code,
            extra={"details": details} if details else None,
        )


class NotFoundError(APIException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found: {identifier}",
            error_code="NOT_FOUND",
        )


class UpstreamUnavailable(APIException):
    """
    The completion endpoint cannot serve the request.

    Covers missing configuration (503), upstream rate limiting (429),
    safety rejections (400) and timeouts (504).
    """

    def __init__(self, detail: str, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE, error_code: str = "UPSTREAM_UNAVAILABLE"):
        super().__init__(status_code=status_code, detail=detail, error_code=error_code)

    @classmethod
    def not_configured(cls) -> "UpstreamUnavailable":
        return cls("AI Coach is not configured. Please set GEMINI_API_KEY.", error_code="COACH_NOT_CONFIGURED")

    @classmethod
    def misconfigured(cls) -> "UpstreamUnavailable":
        return cls("AI Coach configuration error. Please check GEMINI_API_KEY.", error_code="COACH_MISCONFIGURED")

    @classmethod
    def rate_limited(cls) -> "UpstreamUnavailable":
        return cls(
            "AI Coach is temporarily overloaded. Please try again in a moment.",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            error_code="UPSTREAM_RATE_LIMITED",
        )

    @classmethod
    def safety_blocked(cls) -> "UpstreamUnavailable":
        return cls(
            "Your message couldn't be processed. Please rephrase and try again.",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="UPSTREAM_SAFETY_BLOCKED",
        )

    @classmethod
    def timed_out(cls) -> "UpstreamUnavailable":
        return cls(
            "AI Coach took too long to respond. Please try again.",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            error_code="UPSTREAM_TIMEOUT",
        )


class DataIntegrityError(APIException):
    """Referenced data is missing (empty library, unknown exercise slugs)."""

    def __init__(self, detail: str, status_code: int = status.HTTP_400_BAD_REQUEST, error_code: str = "DATA_INTEGRITY", extra: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=detail, error_code=error_code, extra=extra)


class GenerationFailed(APIException):
    """The model answered, but not with a usable template."""

    def __init__(self, detail: str, details: Optional[list] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="GENERATION_FAILED",
            extra={"details": details} if details else None,
        )


class UnknownFailure(APIException):
    """Catch-all for unexpected failures inside a handled flow."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="UNKNOWN_FAILURE",
        )

"""
Security Headers Middleware

Adds the standard protective headers to every API response.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from core.config import settings

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    # Journal photos are plain URLs; the API itself needs no device features.
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=(), usb=()",
}

# JSON API: nothing should ever be rendered or framed from these responses.
API_CSP = "default-src 'none'; frame-ancestors 'none'"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for name, value in BASE_HEADERS.items():
            response.headers[name] = value

        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
            # Swagger UI needs scripts; only lock down the API payloads.
            if not request.url.path.startswith(("/docs", "/redoc", "/openapi.json")):
                response.headers["Content-Security-Policy"] = API_CSP

        return response

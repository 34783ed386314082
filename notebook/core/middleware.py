"""
HTTP Middleware.

Request context tracking, access control, API rate limiting and security
headers. Rejections are produced here as plain-text responses because they
happen before routing.
"""

import uuid
from datetime import datetime, timezone

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from notebook.core.config_schema import SecurityHeadersSchema
from notebook.core.logging import get_logger
from notebook.core.rate_limiter import SlidingWindowRateLimiter
from notebook.core.security import (
    extract_bearer_token,
    get_client_ip,
    is_ip_allowed,
    is_token_allowed,
)

logger = get_logger(__name__)

UNAUTHORISED = "Unauthorised"
TOO_MANY_REQUESTS = "Too many requests, please try again later."


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Features:
    - Generates or propagates request ID (X-Request-ID header)
    - Records request timing (X-Response-Time header)
    - Binds request context to structlog for automatic inclusion in logs
    - Stores context in request.state for access by handlers
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = datetime.now(timezone.utc).replace(tzinfo=None)

        request.state.request_id = request_id
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            response = await call_next(request)

            end_time = datetime.now(timezone.utc).replace(tzinfo=None)
            duration_ms = int((end_time - start_time).total_seconds() * 1000)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

            return response

        except Exception as exc:
            end_time = datetime.now(timezone.utc).replace(tzinfo=None)
            duration_ms = int((end_time - start_time).total_seconds() * 1000)

            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()


class AccessControlMiddleware(BaseHTTPMiddleware):
    """
    Gate requests by bearer token or client IP.

    - Bypass paths (cron, health) are always let through.
    - Token-protected paths need `Authorization: Bearer <token>` (or an
      `apikey` header) with a token from the allow-list.
    - Every other path is checked against the IP allow-list, when one is set.
    """

    def __init__(
        self,
        app: ASGIApp,
        auth_tokens: list[str],
        allowed_ips: list[str],
        token_protected_paths: list[str],
        bypass_paths: list[str],
        trusted_proxy_count: int = 1,
    ) -> None:
        super().__init__(app)
        self.auth_tokens = auth_tokens
        self.allowed_ips = allowed_ips
        self.token_protected_paths = frozenset(token_protected_paths)
        self.bypass_paths = frozenset(bypass_paths)
        self.trusted_proxy_count = trusted_proxy_count

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path

        if path in self.bypass_paths:
            return await call_next(request)

        if path in self.token_protected_paths:
            token = extract_bearer_token(request.headers)
            if not is_token_allowed(token, self.auth_tokens):
                logger.warning("Rejected request without valid token", extra={"path": path})
                return PlainTextResponse(UNAUTHORISED, status_code=403)
            return await call_next(request)

        client_ip = get_client_ip(request, self.trusted_proxy_count)
        if not is_ip_allowed(client_ip, self.allowed_ips):
            logger.error("IP allow-list failure", extra={"client_ip": client_ip})
            return PlainTextResponse(UNAUTHORISED, status_code=403)

        return await call_next(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limit requests per client on paths under a prefix."""

    def __init__(
        self,
        app: ASGIApp,
        limiter: SlidingWindowRateLimiter,
        path_prefix: str,
        trusted_proxy_count: int = 1,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix
        self.trusted_proxy_count = trusted_proxy_count

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = get_client_ip(request, self.trusted_proxy_count)
        result = self.limiter.check(client_ip)
        if not result.allowed:
            return PlainTextResponse(
                TOO_MANY_REQUESTS,
                status_code=429,
                headers={"Retry-After": str(result.retry_after_seconds)},
            )
        return await call_next(request)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the configured security headers to every response."""

    def __init__(self, app: ASGIApp, headers: SecurityHeadersSchema) -> None:
        super().__init__(app)
        self.headers = {
            "X-Content-Type-Options": headers.x_content_type_options,
            "X-Frame-Options": headers.x_frame_options,
            "Referrer-Policy": headers.referrer_policy,
        }
        if headers.hsts_enabled:
            self.headers["Strict-Transport-Security"] = (
                f"max-age={headers.hsts_max_age}; includeSubDomains"
            )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response

"""
Security Utilities.

Bearer-token and IP allow-list checks used by the access control middleware.
"""

import hmac
from collections.abc import Iterable, Mapping

from starlette.requests import Request

UNKNOWN_CLIENT = "-"


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    """
    Get the bearer token of a request.

    An `apikey` header is accepted in place of a missing Authorization
    header and treated as `Bearer <apikey>`.

    Returns:
        The token, "" when the header has no token part, or None when
        no credentials were sent at all
    """
    authorization = headers.get("authorization")
    if not authorization:
        api_key = headers.get("apikey")
        if api_key is None:
            return None
        authorization = f"Bearer {api_key}"

    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""


def is_token_allowed(token: str | None, allowed_tokens: Iterable[str]) -> bool:
    """Check a token against the allow-list. Empty tokens never pass."""
    if not token:
        return False
    return any(
        hmac.compare_digest(token.encode("utf-8"), allowed.encode("utf-8"))
        for allowed in allowed_tokens
    )


def get_client_ip(request: Request, trusted_proxy_count: int = 1) -> str:
    """
    Resolve the client address of a request.

    Each trusted proxy appends the address it received the request from to
    X-Forwarded-For, so the entry `trusted_proxy_count` hops from the right
    is the last one a trusted hop wrote. Entries left of it come from the
    client and are ignored. With no trusted proxies the socket peer is used.
    """
    peer = request.client.host if request.client else UNKNOWN_CLIENT
    if trusted_proxy_count <= 0:
        return peer

    forwarded = request.headers.get("x-forwarded-for", "")
    hops = [peer] + [entry.strip() for entry in reversed(forwarded.split(",")) if entry.strip()]
    return hops[min(trusted_proxy_count, len(hops) - 1)]


def is_ip_allowed(client_ip: str, allowed_ips: list[str]) -> bool:
    """An empty allow-list lets every client through."""
    if not allowed_ips:
        return True
    return client_ip in allowed_ips

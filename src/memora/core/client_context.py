"""Client metadata (IP address, user agent) recorded with each session."""

from dataclasses import dataclass

from starlette.requests import Request

MAX_USER_AGENT_LENGTH = 500


@dataclass(frozen=True)
class ClientInfo:
    """Immutable client metadata for the current request."""

    ip_address: str | None = None
    user_agent: str | None = None


def get_client_ip(forwarded_for: str | None, client_host: str | None) -> str | None:
    """Extract client IP from X-Forwarded-For header or client host.

    Args:
        forwarded_for: Value of X-Forwarded-For header (may contain multiple IPs)
        client_host: Direct client host from the connection

    Returns:
        The client IP address (first IP from X-Forwarded-For, or client host)
    """
    if forwarded_for:
        # First entry is the original client; later ones are proxies
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return client_host


def client_info_from_request(request: Request) -> ClientInfo:
    user_agent = request.headers.get("user-agent")
    return ClientInfo(
        ip_address=get_client_ip(
            request.headers.get("x-forwarded-for"),
            request.client.host if request.client else None,
        ),
        user_agent=user_agent[:MAX_USER_AGENT_LENGTH] if user_agent else None,
    )

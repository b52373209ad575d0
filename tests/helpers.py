"""Shared helpers for tests."""

API = "/api/v1"


def bearer(access_token: str) -> dict[str, str]:
    """Authorization header for an access token."""
    return {"Authorization": f"Bearer {access_token}"}

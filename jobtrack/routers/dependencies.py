"""Shared router dependencies."""

from fastapi import Header

from jobtrack.core.exceptions import AuthenticationError

USER_ID_HEADER = "X-User-Id"


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """User identity injected by the upstream auth layer."""
    if x_user_id is None or not x_user_id.strip():
        raise AuthenticationError(f"Missing {USER_ID_HEADER} header")
    return x_user_id.strip()

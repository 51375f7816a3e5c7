"""Caller identity extraction and the anonymous-caller gate."""

from typing import Optional

from fastapi import Header

from common.logging_config import get_logger
from filestore import config
from filestore.exceptions import InvalidAuthorizationHeaderError, UnauthenticatedError

logger = get_logger(__name__)


def is_authenticated(identity: str) -> bool:
    """
    Check whether an identity is a real principal.

    Args:
        identity: Opaque caller principal

    Returns:
        False for the anonymous sentinel, True otherwise
    """
    return identity != config.ANONYMOUS_PRINCIPAL


def ensure_authenticated(identity: str) -> None:
    """
    Reject anonymous callers.

    Raises:
        UnauthenticatedError: If identity is the anonymous sentinel
    """
    if not is_authenticated(identity):
        logger.warning("Rejected anonymous caller")
        raise UnauthenticatedError("This operation requires an authenticated caller")


async def get_current_identity(authorization: Optional[str] = Header(None)) -> str:
    """
    FastAPI dependency extracting the caller principal.

    The principal is produced and verified by the identity layer in front
    of this service and arrives as "Bearer <principal>". A missing header
    means the anonymous principal.

    Args:
        authorization: Authorization header value

    Returns:
        Caller identity

    Raises:
        InvalidAuthorizationHeaderError: If the header is not a bearer value
    """
    if authorization is None:
        return config.ANONYMOUS_PRINCIPAL

    if not authorization.startswith("Bearer "):
        raise InvalidAuthorizationHeaderError("Invalid authorization header format")

    identity = authorization[len("Bearer "):].strip()
    if not identity:
        raise InvalidAuthorizationHeaderError("Empty principal in authorization header")

    return identity

"""Authentication: FastAPI dependency resolving the caller.

``require_auth`` returns an ``AuthContext`` or raises 401. When
``settings.auth_enabled`` is False it returns an anonymous admin context so
local development and tests need no tokens.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .token_factory import decode_token
from ..exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller. ``user_id`` is recorded as uploader,
    recorder, creator, or assigner on the records it writes."""

    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


_ANONYMOUS = AuthContext(user_id="anonymous", role="admin")


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> AuthContext:
    """Require a valid bearer token and return the caller's context."""
    if not settings.auth_enabled:
        return _ANONYMOUS

    if credentials is None:
        raise AuthenticationError("Missing authentication token")

    payload = decode_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm
    )
    if payload is None:
        logger.info("Rejected bearer token")
        raise AuthenticationError("Invalid or expired token")

    return AuthContext(user_id=payload.sub, role=payload.role)

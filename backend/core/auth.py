"""
Bearer-token authentication and role checks.

Tokens are issued elsewhere; this module only decodes them into a
``Caller`` that is passed explicitly into every service call.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import settings
from .exceptions import AuthenticationError, PermissionError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    RESTAURANT_OWNER = "RESTAURANT_OWNER"
    DELIVERY_PARTNER = "DELIVERY_PARTNER"


@dataclass(frozen=True)
class Caller:
    """The authenticated principal driving a request."""

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def create_access_token(
    user_id: int, role: UserRole, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT access token."""
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "sub": str(user_id),
        "role": UserRole(role).value,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(
        to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> Caller:
    """Decode a token into a Caller, raising AuthenticationError if invalid."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    try:
        return Caller(user_id=int(payload["sub"]), role=UserRole(payload["role"]))
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Malformed token claims")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Caller:
    """Resolve the current caller from the Authorization header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")
    return verify_token(credentials.credentials)


class AuthorizationRequirement:
    """FastAPI dependency that admits only the listed roles."""

    def __init__(self, roles: List[UserRole]):
        self.roles = frozenset(UserRole(role) for role in roles)

    def __call__(self, caller: Caller = Depends(get_current_user)) -> Caller:
        if caller.role not in self.roles:
            raise PermissionError(
                f"Operation requires one of these roles: "
                f"{sorted(role.value for role in self.roles)}"
            )
        return caller


def require_roles(required_roles: List[UserRole]) -> AuthorizationRequirement:
    """Enforce that the current caller holds one of the specified roles."""
    return AuthorizationRequirement(required_roles)

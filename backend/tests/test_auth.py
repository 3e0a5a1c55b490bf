from datetime import datetime, timedelta

import pytest
from jose import jwt

from backend.core.auth import (
    Caller,
    UserRole,
    create_access_token,
    require_roles,
    verify_token,
)
from backend.core.config import settings
from backend.core.exceptions import AuthenticationError, ForbiddenError


class TestTokens:

    def test_round_trip(self):
        token = create_access_token(42, UserRole.CUSTOMER)

        assert verify_token(token) == Caller(user_id=42, role=UserRole.CUSTOMER)

    def test_expired_token(self):
        token = create_access_token(42, UserRole.CUSTOMER, expires_delta=timedelta(seconds=-5))

        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "42", "role": "ADMIN", "type": "access",
             "exp": datetime.utcnow() + timedelta(minutes=5)},
            "another-secret",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_refresh_token_is_not_accepted(self):
        token = jwt.encode(
            {"sub": "42", "role": "ADMIN", "type": "refresh",
             "exp": datetime.utcnow() + timedelta(minutes=5)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_unknown_role(self):
        token = jwt.encode(
            {"sub": "42", "role": "CHEF", "type": "access",
             "exp": datetime.utcnow() + timedelta(minutes=5)},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            verify_token(token)


class TestRoleRequirement:

    def test_listed_role_passes(self):
        caller = Caller(user_id=1, role=UserRole.RESTAURANT_OWNER)
        requirement = require_roles([UserRole.ADMIN, UserRole.RESTAURANT_OWNER])

        assert requirement(caller) is caller

    def test_admin_is_not_implicit(self):
        requirement = require_roles([UserRole.CUSTOMER])

        with pytest.raises(ForbiddenError):
            requirement(Caller(user_id=1, role=UserRole.ADMIN))

"""Auth service: check credentials against the store, mint and resolve bearer tokens."""

import logging
from typing import TYPE_CHECKING

import jwt

from app.core.errors import InvalidCredentials, InvalidToken, MalformedToken, MissingToken
from app.core.security import create_access_token, decode_access_token, verify_password
from app.models import User
from app.schemas.auth import LoginResult, UserView

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.core.storage import DocumentStore

logger = logging.getLogger(__name__)


def to_user_view(user: User) -> UserView:
    """Sanitized user (no password hash)."""
    return UserView(id=user.id, username=user.username, role=user.role, name=user.name)


class AuthService:
    """Login and token resolution. Read-only over the store."""

    def __init__(self, store: "DocumentStore", settings: "Settings") -> None:
        self._store = store
        self._settings = settings

    def login(self, username: str, password: str) -> LoginResult:
        """
        Match username exactly (case-sensitive) and verify the password.
        Raises InvalidCredentials on any mismatch.
        """
        user = self._store.snapshot().find_user_by_username(username)
        if user is None:
            logger.info("Login failed: unknown username %r", username)
            raise InvalidCredentials("Invalid username or password.")
        if not verify_password(password, user.password_hash):
            logger.info("Login failed: wrong password for %r", username)
            raise InvalidCredentials("Invalid username or password.")
        token = create_access_token(user.id, user.username, user.role, self._settings)
        logger.info("User %r (role=%s) logged in", user.username, user.role)
        return LoginResult(token=token, user=to_user_view(user))

    def authenticate(self, token: str | None) -> UserView:
        """
        Resolve a bearer token to the current user.

        MissingToken: no token. MalformedToken: not a decodable token, or claims without
        a usable sub/username. InvalidToken: bad signature, expired, or unknown identity.
        """
        if token is None or not token.strip():
            raise MissingToken("Not authenticated")
        try:
            payload = decode_access_token(token.strip(), self._settings)
        except (jwt.InvalidSignatureError, jwt.ExpiredSignatureError) as e:
            raise InvalidToken("Invalid or expired token", cause=e) from e
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as e:
            raise MalformedToken("Malformed token", cause=e) from e
        except jwt.PyJWTError as e:
            raise InvalidToken("Invalid or expired token", cause=e) from e

        sub = payload.get("sub")
        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise MalformedToken("Invalid token payload")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise MalformedToken("Invalid token payload", cause=e) from e

        user = self._store.snapshot().find_user(user_id)
        if user is None or user.username != username:
            raise InvalidToken("User not found")
        return to_user_view(user)

from datetime import timedelta

import structlog

from ...domain.entities import Identity, Role
from ...domain.errors import AuthError, InvalidInput, NotFound, ServerError, Unauthorized
from ..dto import LoginResult
from ..interfaces import IIdentityRepository, IPasswordHasher, ITokenIssuer

logger = structlog.get_logger()

# Students are looked up before teachers; the first partition with a row wins.
LOOKUP_ORDER = (Role.STUDENT, Role.TEACHER)
MIN_PASSWORD_LENGTH = 3


class LoginUser:
    def __init__(self, repo: IIdentityRepository, hasher: IPasswordHasher,
                 tokens: ITokenIssuer, token_ttl: timedelta = timedelta(hours=1)):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens
        self.token_ttl = token_ttl

    def execute(self, email: str | None, password: str | None) -> LoginResult:
        if not password or len(password) <= MIN_PASSWORD_LENGTH:
            raise InvalidInput(f"Password must be longer than {MIN_PASSWORD_LENGTH} characters.")
        if not email:
            raise InvalidInput("Email is required.")

        try:
            identity = self._locate(email)
            if identity is None:
                logger.info("login_failed", reason="not_found")
                raise NotFound("User not found.")

            if not self.hasher.verify(password, identity.password_hash):
                logger.info("login_failed", reason="bad_password", role=identity.role.value)
                raise Unauthorized("Invalid credentials.")

            token = self.tokens.issue({"id": identity.id, "username": identity.name}, self.token_ttl)
        except AuthError:
            raise
        except Exception as e:
            logger.error("login_error", error=str(e), exc_info=True)
            raise ServerError("Server error.") from e

        logger.info("login_succeeded", identity_id=identity.id, role=identity.role.value)
        return LoginResult(
            display_name=identity.name,
            token=token,
            identity=identity,
            expires_in=int(self.token_ttl.total_seconds()),
        )

    def _locate(self, email: str) -> Identity | None:
        for role in LOOKUP_ORDER:
            identity = self.repo.find_by_email(role, email)
            if identity is not None:
                return identity
        return None

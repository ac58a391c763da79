from datetime import datetime, timedelta, timezone

from jose import jwt, ExpiredSignatureError, JWTError
from passlib.context import CryptContext

from ..application.interfaces import IPasswordHasher, ITokenIssuer
from ..domain.errors import ConfigError, TokenExpired, TokenInvalid

BCRYPT_ROUNDS = 10

# bcrypt_sha256 hashes new passwords; plain bcrypt only verifies legacy $2a$/$2b$ rows.
pwd = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    default="bcrypt_sha256",
    deprecated="auto",
    bcrypt_sha256__rounds=BCRYPT_ROUNDS,
    bcrypt__rounds=BCRYPT_ROUNDS,
)


class PasswordHasher(IPasswordHasher):
    """Salted bcrypt over a SHA-256 digest; the salt travels inside the hash."""

    def hash(self, plain: str) -> str: return pwd.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        try:
            return pwd.verify(plain, hashed)
        except (ValueError, TypeError):
            # unrecognised or malformed hash
            return False


class TokenIssuer(ITokenIssuer):
    def __init__(self, secret: str | None, algorithm: str = "HS256"):
        if not secret:
            raise ConfigError("SECRET_KEY is not set; refusing to issue tokens")
        self._secret = secret
        self.algorithm = algorithm

    def issue(self, claims: dict, ttl: timedelta) -> str:
        exp = datetime.now(timezone.utc) + ttl
        payload = {**claims, "exp": exp}
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """Return the claims of ``token`` or raise ``TokenExpired``/``TokenInvalid``."""
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpired("Token expired") from e
        except JWTError as e:
            raise TokenInvalid("Invalid token") from e

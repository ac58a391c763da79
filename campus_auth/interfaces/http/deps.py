from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ...application.use_cases.login_user import LoginUser
from ...application.use_cases.register_user import RegisterUser
from ...config import settings
from ...infrastructure.db import get_db
from ...infrastructure.repositories import IdentityRepository
from ...infrastructure.security import PasswordHasher, TokenIssuer
from ...infrastructure.storage import CloudinaryDocumentUploader


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache
def get_document_uploader() -> CloudinaryDocumentUploader:
    return CloudinaryDocumentUploader.from_settings(settings)


def token_ttl() -> timedelta:
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def get_login_user(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> LoginUser:
    return LoginUser(repo=IdentityRepository(db), hasher=hasher, tokens=tokens, token_ttl=token_ttl())


def get_register_user(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
    uploader: CloudinaryDocumentUploader = Depends(get_document_uploader),
) -> RegisterUser:
    return RegisterUser(
        repo=IdentityRepository(db),
        hasher=hasher,
        tokens=tokens,
        uploader=uploader,
        token_ttl=token_ttl(),
    )

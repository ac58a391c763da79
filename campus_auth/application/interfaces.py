from datetime import timedelta
from typing import BinaryIO

from ..domain.entities import Identity, Role


class IIdentityRepository:
    def find_by_email(self, role: Role, email: str) -> Identity | None: ...
    def create(self, role: Role, name: str, surname: str, email: str,
               password_hash: str, document_url: str) -> Identity: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...


class ITokenIssuer:
    def issue(self, claims: dict, ttl: timedelta) -> str: ...
    def verify(self, token: str) -> dict: ...


class IDocumentUploader:
    def upload(self, file: BinaryIO, filename: str) -> str: ...

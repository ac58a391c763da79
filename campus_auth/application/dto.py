from dataclasses import dataclass
from typing import BinaryIO

from ..domain.entities import Identity


@dataclass
class RegisterUserInput:
    name: str | None
    surname: str | None
    email: str | None
    password: str | None
    role: str | None


@dataclass
class UploadedDocument:
    filename: str
    file: BinaryIO

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


@dataclass
class LoginResult:
    display_name: str
    token: str
    identity: Identity
    expires_in: int


@dataclass
class RegistrationResult:
    message: str
    identity: Identity
    token: str
    document_url: str

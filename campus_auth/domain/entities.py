from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"

    @classmethod
    def parse(cls, value: str) -> "Role | None":
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Identity:
    id: int | None
    name: str
    surname: str
    email: str
    password_hash: str
    document_url: str
    role: Role

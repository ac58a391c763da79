from datetime import datetime

from sqlalchemy import String, Integer, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base
from ..domain.entities import Role


class IdentityColumns:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    surname: Mapped[str] = mapped_column(String(120), nullable=False)
    # indexed, not unique: the same address may exist in the other table
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    document_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
    )


class StudentORM(IdentityColumns, Base):
    __tablename__ = "students"

    def __repr__(self) -> str:
        return f"StudentORM(id={self.id!r}, email={self.email!r})"


class TeacherORM(IdentityColumns, Base):
    __tablename__ = "teachers"

    def __repr__(self) -> str:
        return f"TeacherORM(id={self.id!r}, email={self.email!r})"


ORM_BY_ROLE: dict[Role, type[IdentityColumns]] = {
    Role.STUDENT: StudentORM,
    Role.TEACHER: TeacherORM,
}

__all__ = [
    "Base",
    "StudentORM",
    "TeacherORM",
    "ORM_BY_ROLE",
]

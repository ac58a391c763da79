from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import ORM_BY_ROLE, IdentityColumns
from ..domain.entities import Identity, Role
from ..application.interfaces import IIdentityRepository


def to_domain(row: IdentityColumns, role: Role) -> Identity:
    return Identity(
        id=row.id,
        name=row.name,
        surname=row.surname,
        email=row.email,
        password_hash=row.password_hash,
        document_url=row.document_url,
        role=role,
    )


class IdentityRepository(IIdentityRepository):
    """Both role tables behind one interface, addressed by ``Role``."""

    def __init__(self, db: Session): self.db = db

    def find_by_email(self, role: Role, email: str) -> Identity | None:
        model = ORM_BY_ROLE[role]
        row = self.db.execute(
            select(model).where(model.email == email).order_by(model.id).limit(1)
        ).scalar_one_or_none()
        return to_domain(row, role) if row else None

    def create(self, role: Role, name: str, surname: str, email: str,
               password_hash: str, document_url: str) -> Identity:
        model = ORM_BY_ROLE[role]
        row = model(
            name=name,
            surname=surname,
            email=email,
            password_hash=password_hash,
            document_url=document_url,
        )
        try:
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        except Exception:
            self.db.rollback()
            raise
        return to_domain(row, role)

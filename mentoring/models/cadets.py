from __future__ import annotations

from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base, db


class Cadet(Base):
    __tablename__ = "cadets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, unique=True)
    intra_id: Mapped[str] = mapped_column(String(64), unique=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    @classmethod
    async def create(cls, intra_id: str, name: str | None = None) -> Cadet:
        return await db.add(cls(id=str(uuid4()), intra_id=intra_id, name=name))

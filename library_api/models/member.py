"""Library API: Member SQLAlchemy Model (``members`` table)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base


class Member(Base):
    """A library member who may hold zero or more loans."""

    __tablename__ = "members"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    full_name: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, full_name='{self.full_name}')>"

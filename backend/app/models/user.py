"""
Storefront Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `app_user` table.
Who:   Used by the user ResourceService and by create_tables().

Table Design:
    - email carries a named unique constraint (uq_app_user_email). The
      service maps a violation of it back to "user already exists".
    - password is stored as provided (escaped, not hashed). It is never
      included in API responses.
    - role is free text; nothing in the API enforces it.
"""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """An application user."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-generated identifier",
    )

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Escaped email address, unique across users",
    )

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="user",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_app_user_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

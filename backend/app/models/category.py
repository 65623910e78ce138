"""
Storefront Backend — Category SQLAlchemy Model
================================================

What:  ORM model representing the `category` table.
Who:   Used by the category ResourceService and by create_tables().

Table Design:
    - id: integer identity assigned by the store, never updated
    - category_name: required, escaped text
    - description: optional, stored as '' when the client omits it
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Category(Base):
    """A product category."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-generated identifier",
    )

    category_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Escaped category name",
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default="",
        comment="Escaped free-text description",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, category_name='{self.category_name}')>"

"""
Storefront Backend — Product SQLAlchemy Model
===============================================

What:  ORM model representing the `product` table.
Who:   Used by the product ResourceService and by create_tables().

Table Design:
    - category_id: foreign key to category.id. The validator only checks it
      is a non-negative integer; referential checks belong to the store.
    - stock: non-negative integer
    - price: NUMERIC(10, 2), non-negative
    - No cascade is declared; deleting a category with products is decided
      by the store's FK enforcement.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    """A product belonging to a category."""

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-generated identifier",
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.id"),
        nullable=False,
        index=True,
        comment="Owning category",
    )

    product_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Escaped product name",
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default="",
        comment="Escaped free-text description",
    )

    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Units in stock, >= 0",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0"),
        comment="Unit price, >= 0",
    )

    def __repr__(self) -> str:
        return (
            f"<Product(id={self.id}, product_name='{self.product_name}', "
            f"category_id={self.category_id})>"
        )

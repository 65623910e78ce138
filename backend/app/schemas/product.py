"""Response schema for the Product resource."""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field, PlainSerializer

from app.schemas.common import ResourceModel

# NUMERIC columns come back as Decimal; JSON clients expect a number
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductResponse(ResourceModel):
    """Serialized as {"id", "categoryId", "productName", "description", "stock", "price"}."""
    id: int = Field(description="Store-generated identifier")
    category_id: int = Field(description="Owning category id")
    product_name: str = Field(description="Escaped product name")
    description: Optional[str] = Field(default=None, description="Escaped description")
    stock: int = Field(description="Units in stock")
    price: Price = Field(description="Unit price")

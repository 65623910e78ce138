"""Response schema for the Category resource."""

from typing import Optional

from pydantic import Field

from app.schemas.common import ResourceModel


class CategoryResponse(ResourceModel):
    """Serialized as {"id", "categoryName", "description"}."""
    id: int = Field(description="Store-generated identifier")
    category_name: str = Field(description="Escaped category name")
    description: Optional[str] = Field(default=None, description="Escaped description")

"""Response schema for the User resource."""

from pydantic import Field

from app.schemas.common import ResourceModel


class UserResponse(ResourceModel):
    """
    Serialized as {"id", "firstName", "lastName", "email", "role"}.

    The stored password is never part of this model.
    """
    id: int = Field(description="Store-generated identifier")
    first_name: str = Field(description="Escaped first name")
    last_name: str = Field(description="Escaped last name")
    email: str = Field(description="Escaped email address")
    role: str = Field(description="Free-text role")

"""
Storefront Backend — Resource Registry
========================================

What:  Declares the Category, Product and User resources.
How:   Each resource is a ResourceSchema (model, response model, writable
       fields, filter allow-list) wrapped in a ResourceService singleton.
Who:   Imported by main.py to mount one router per service.

Filter allow-lists:
    category → none
    product  → id, categoryId, productName
    user     → id, firstName, lastName, email, role
"""

from app.models.category import Category
from app.models.product import Product
from app.models.user import User
from app.schemas.category import CategoryResponse
from app.schemas.product import ProductResponse
from app.schemas.user import UserResponse
from app.services.resource_service import ResourceSchema, ResourceService
from app.services.validation import DECIMAL, EMAIL, INTEGER, TEXT, FieldSpec

ID_FILTER = FieldSpec("id", "id", INTEGER)


CATEGORY = ResourceSchema(
    name="category",
    title="Category",
    model=Category,
    response_model=CategoryResponse,
    fields=(
        FieldSpec("categoryName", "category_name", TEXT),
        FieldSpec("description", "description", TEXT, required=False, default=""),
    ),
)

PRODUCT_FIELDS = (
    FieldSpec("categoryId", "category_id", INTEGER),
    FieldSpec("productName", "product_name", TEXT),
    FieldSpec("description", "description", TEXT, required=False, default=""),
    FieldSpec("stock", "stock", INTEGER),
    FieldSpec("price", "price", DECIMAL),
)

PRODUCT = ResourceSchema(
    name="product",
    title="Product",
    model=Product,
    response_model=ProductResponse,
    fields=PRODUCT_FIELDS,
    filters=(ID_FILTER, PRODUCT_FIELDS[0], PRODUCT_FIELDS[1]),
)

USER_FIELDS = (
    FieldSpec("firstName", "first_name", TEXT),
    FieldSpec("lastName", "last_name", TEXT),
    FieldSpec("email", "email", EMAIL, unique_message="user already exists"),
    FieldSpec("password", "password", TEXT),
    FieldSpec("role", "role", TEXT, required=False, default="user"),
)

USER = ResourceSchema(
    name="user",
    title="User",
    model=User,
    response_model=UserResponse,
    fields=USER_FIELDS,
    # password is never filterable
    filters=(ID_FILTER, USER_FIELDS[0], USER_FIELDS[1], USER_FIELDS[2], USER_FIELDS[4]),
)


# ── Singleton Instances ───────────────────────────────────────────────────
category_service = ResourceService(CATEGORY)
product_service = ResourceService(PRODUCT)
user_service = ResourceService(USER)

resource_services = (category_service, product_service, user_service)

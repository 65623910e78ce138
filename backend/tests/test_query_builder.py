"""
Storefront Backend — Filter Builder Unit Tests
================================================

What:  Tests for build_filter_clause().
How:   Builds statements against the real models and inspects the compiled
       WHERE clause; nothing is executed.

What we test:
    ✅ Unrecognized keys never reach the statement
    ✅ Values are bound, never inlined
    ✅ Multiple filters are ANDed
    ✅ Malformed integer filters are rejected
    ✅ Integers beyond the column range match no row
"""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from app.exceptions import ValidationError
from app.models.category import Category
from app.models.product import Product
from app.models.user import User
from app.services.query_builder import build_filter_clause
from app.services.resources import CATEGORY, PRODUCT, USER


def _where(query) -> str:
    return str(query.whereclause)


def _where_pg(query) -> str:
    return str(query.whereclause.compile(dialect=postgresql.dialect()))


class TestBuildFilterClause:
    """Tests for build_filter_clause()."""

    def test_no_params_returns_base_query(self):
        base = select(User)
        query, bindings = build_filter_clause(base, User, {}, USER.filters)
        assert query is base
        assert bindings == {}

    def test_unknown_keys_ignored(self):
        base = select(User)
        query, bindings = build_filter_clause(
            base, User, {"password": "secret", "sort": "id; DROP TABLE app_user"}, USER.filters
        )
        assert query is base
        assert bindings == {}

    def test_resource_without_filters_ignores_everything(self):
        base = select(Category)
        query, bindings = build_filter_clause(
            base, Category, {"categoryName": "Books", "id": "1"}, CATEGORY.filters
        )
        assert query is base
        assert bindings == {}

    def test_single_filter(self):
        query, bindings = build_filter_clause(
            select(User), User, {"lastName": "Lovelace"}, USER.filters
        )
        assert bindings == {"filter_last_name": "Lovelace"}
        assert _where(query) == "app_user.last_name = :filter_last_name"

    def test_multiple_filters_are_anded(self):
        query, bindings = build_filter_clause(
            select(User), User, {"role": "admin", "lastName": "Lovelace"}, USER.filters
        )
        assert bindings == {"filter_last_name": "Lovelace", "filter_role": "admin"}
        assert _where(query) == (
            "app_user.last_name = :filter_last_name AND app_user.role = :filter_role"
        )

    def test_values_are_bound_not_inlined(self):
        query, _ = build_filter_clause(
            select(User), User, {"firstName": "x' OR '1'='1"}, USER.filters
        )
        assert "OR" not in _where(query)
        assert query.compile().params["filter_first_name"] == "x&#x27; OR &#x27;1&#x27;=&#x27;1"

    def test_text_values_escaped_like_stored_values(self):
        _, bindings = build_filter_clause(
            select(Product), Product, {"productName": "<Pens & Ink>"}, PRODUCT.filters
        )
        assert bindings == {"filter_product_name": "&lt;Pens &amp; Ink&gt;"}

    def test_integer_filters_converted(self):
        _, bindings = build_filter_clause(
            select(Product), Product, {"id": "4", "categoryId": "2"}, PRODUCT.filters
        )
        assert bindings == {"filter_id": 4, "filter_category_id": 2}

    def test_empty_values_ignored(self):
        base = select(User)
        query, bindings = build_filter_clause(base, User, {"email": "", "role": ""}, USER.filters)
        assert query is base
        assert bindings == {}

    def test_malformed_id_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            build_filter_clause(select(User), User, {"id": "abc"}, USER.filters)
        assert exc_info.value.message == "invalid id; "

    def test_every_malformed_integer_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            build_filter_clause(
                select(Product), Product, {"id": "-1", "categoryId": "1.5"}, PRODUCT.filters
            )
        assert [e.field for e in exc_info.value.errors] == ["id", "categoryId"]

    def test_out_of_range_integer_matches_nothing(self):
        query, bindings = build_filter_clause(
            select(Product), Product, {"id": "99999999999999999999999"}, PRODUCT.filters
        )
        assert bindings == {}
        assert "filter_id" not in str(query)
        assert _where_pg(query) == "false"

    def test_out_of_range_integer_combined_with_other_filters(self):
        query, bindings = build_filter_clause(
            select(Product),
            Product,
            {"categoryId": "2147483648", "productName": "Pen"},
            PRODUCT.filters,
        )
        assert bindings == {"filter_product_name": "Pen"}
        assert "false" in _where_pg(query)

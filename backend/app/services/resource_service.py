"""
Storefront Backend — Resource Service (CRUD Orchestrator)
===========================================================

What:  One generic handler for list / get / create / update / delete.
How:   Parameterized by a ResourceSchema (table model, response model, field
       specs, filter allow-list). Category, Product and User register a
       schema in app/services/resources.py instead of re-implementing handlers.
Who:   Called by the routes built in app/routes/resources.py.

Operation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Statement   │───▶│ Response │
    │          │    │  (no I/O)   │    │  (bound)     │    │  model   │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Create runs one INSERT ... RETURNING; update runs one UPDATE ... RETURNING.
    Both return the row as the store wrote it.

Error Handling:
    - Invalid input → ValidationError before any write is attempted
    - Unique-constraint violations on a unique field → ValidationError
    - Foreign-key and other constraint violations → DatabaseError
    - Any other SQLAlchemy failure → DatabaseError with the driver message
    - Nothing is retried

Missing rows:
    get/update return None and delete succeeds when no row has the id. Ids
    above MAX_INTEGER name no row and are answered without a query.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from sqlalchemy import UniqueConstraint, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import DatabaseError, FieldError, ValidationError
from app.schemas.common import ResourceModel
from app.services.query_builder import build_filter_clause
from app.services.validation import FieldSpec, in_integer_range, validate_fields, validate_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceSchema:
    """
    Everything the generic handler needs to know about one resource.

    Attributes:
        name:           URL segment and log label, e.g. "category"
        title:          Display name for OpenAPI tags, e.g. "Category"
        model:          SQLAlchemy model class (must have an integer `id`)
        response_model: Pydantic model returned to clients
        fields:         Writable fields, validated on create and update
        filters:        Query-string keys accepted by list_resources()
    """
    name: str
    title: str
    model: Type[Base]
    response_model: Type[ResourceModel]
    fields: Tuple[FieldSpec, ...]
    filters: Tuple[FieldSpec, ...] = ()

    @property
    def unique_fields(self) -> List[FieldSpec]:
        return [spec for spec in self.fields if spec.unique_message]


class ResourceService:
    """
    CRUD operations for a single resource.

    Stateless apart from its schema; every call receives the request's
    AsyncSession, which commits or rolls back in get_db_session().
    """

    def __init__(self, schema: ResourceSchema):
        self.schema = schema

    @property
    def model(self) -> Type[Base]:
        return self.schema.model

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_resources(
        self,
        db: AsyncSession,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[ResourceModel]:
        """
        Return every row matching the recognized filters, ordered by id.

        Raises:
            ValidationError: A filter value was malformed
            DatabaseError: Query execution failed
        """
        query, bindings = build_filter_clause(
            select(self.model).order_by(self.model.id),
            self.model,
            params or {},
            self.schema.filters,
        )
        if bindings:
            logger.debug("Listing %s with filters %s", self.schema.name, sorted(bindings))

        try:
            result = await db.execute(query)
            rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._store_error("list", e) from e

        return [self._to_response(row) for row in rows]

    async def get_resource(self, db: AsyncSession, resource_id: Any) -> Optional[ResourceModel]:
        """
        Fetch one row by id.

        Returns None when no row has this id.

        Raises:
            ValidationError: id is not digits-only (checked before any query)
            DatabaseError: Query execution failed
        """
        row_id = validate_id(resource_id)
        if not in_integer_range(row_id):
            return None
        try:
            result = await db.execute(select(self.model).where(self.model.id == row_id))
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._store_error("get", e, row_id) from e

        return self._to_response(row) if row is not None else None

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_resource(self, db: AsyncSession, fields: Mapping[str, Any]) -> ResourceModel:
        """
        Validate and insert a new row, returning it as stored.

        Raises:
            ValidationError: Any field failed, or a unique value already exists
            DatabaseError: Statement execution failed
        """
        checked = validate_fields(self.schema.fields, fields, is_update=False)
        checked.errors.extend(await self._find_duplicates(db, checked.values))
        if not checked.ok:
            raise ValidationError(
                checked.errors,
                context={"resource": self.schema.name, "operation": "create"},
            )

        statement = insert(self.model).values(**checked.values).returning(self.model)
        row = await self._execute_write(db, statement, "create")
        logger.info("Created %s %s", self.schema.name, row.id)
        return self._to_response(row)

    async def update_resource(
        self,
        db: AsyncSession,
        fields: Mapping[str, Any],
    ) -> Optional[ResourceModel]:
        """
        Validate and update the row named by fields["id"].

        Returns the updated row, or None when no row has this id.

        Raises:
            ValidationError: id or any other field failed
            DatabaseError: Statement execution failed
        """
        checked = validate_fields(self.schema.fields, fields, is_update=True)
        if not checked.ok:
            raise ValidationError(
                checked.errors,
                context={"resource": self.schema.name, "operation": "update"},
            )

        values = dict(checked.values)
        row_id = values.pop("id")
        if not in_integer_range(row_id):
            logger.info("Update of %s %s matched no row", self.schema.name, row_id)
            return None
        statement = (
            update(self.model)
            .where(self.model.id == row_id)
            .values(**values)
            .returning(self.model)
        )
        row = await self._execute_write(db, statement, "update", row_id)
        if row is None:
            logger.info("Update of %s %s matched no row", self.schema.name, row_id)
            return None

        logger.info("Updated %s %s", self.schema.name, row_id)
        return self._to_response(row)

    async def delete_resource(self, db: AsyncSession, resource_id: Any) -> None:
        """
        Delete the row with this id. Succeeds whether or not a row matched.

        Raises:
            ValidationError: id is not digits-only (checked before any query)
            DatabaseError: Statement execution failed
        """
        row_id = validate_id(resource_id)
        if not in_integer_range(row_id):
            logger.info("Deleted %s %s (0 rows)", self.schema.name, row_id)
            return
        try:
            result = await db.execute(delete(self.model).where(self.model.id == row_id))
        except SQLAlchemyError as e:
            raise self._store_error("delete", e, row_id) from e

        logger.info("Deleted %s %s (%s rows)", self.schema.name, row_id, result.rowcount)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _find_duplicates(
        self,
        db: AsyncSession,
        values: Dict[str, Any],
    ) -> List[FieldError]:
        """
        Look up existing rows for each unique field that passed validation.

        Best-effort: the unique constraint in the store still decides when
        two creates race, see _execute_write().
        """
        errors = []
        for spec in self.schema.unique_fields:
            if spec.attribute not in values:
                continue
            column = getattr(self.model, spec.attribute)
            try:
                result = await db.execute(
                    select(self.model.id).where(column == values[spec.attribute]).limit(1)
                )
                existing = result.first()
            except SQLAlchemyError as e:
                raise self._store_error("create", e) from e
            if existing is not None:
                errors.append(FieldError(spec.name, spec.unique_message))
        return errors

    async def _execute_write(
        self,
        db: AsyncSession,
        statement: Any,
        operation: str,
        row_id: Optional[int] = None,
    ) -> Any:
        """Run an INSERT/UPDATE ... RETURNING and return the ORM row (or None)."""
        try:
            result = await db.execute(statement)
            return result.scalar_one_or_none()
        except IntegrityError as e:
            errors = self._conflict_errors(e)
            if errors:
                logger.warning(
                    "%s %s rejected by store constraint: %s",
                    self.schema.name, operation, [error.field for error in errors],
                )
                raise ValidationError(
                    errors,
                    context={"resource": self.schema.name, "operation": operation},
                ) from e
            raise self._store_error(operation, e, row_id) from e
        except SQLAlchemyError as e:
            raise self._store_error(operation, e, row_id) from e

    def _conflict_errors(self, exc: IntegrityError) -> List[FieldError]:
        """
        Map a unique-constraint violation to the fields it covers.

        Recognized forms:
            asyncpg:  exc.orig.__cause__.constraint_name == "uq_app_user_email"
            Postgres: duplicate key value violates unique constraint "uq_app_user_email"
            SQLite:   UNIQUE constraint failed: app_user.email

        Only the first line of the driver message is read; later lines such as
        Postgres' DETAIL echo the submitted values. Any other violation
        (foreign key, not-null) yields no fields and stays a store error.
        """
        driver_error = exc.orig if exc.orig is not None else exc
        constraint_name = (getattr(driver_error.__cause__, "constraint_name", None) or "").lower()
        headline = str(driver_error).split("\n", 1)[0].lower()

        sqlite_columns = set()
        if headline.startswith("unique constraint failed:"):
            failed = headline.split(":", 1)[1]
            sqlite_columns = {column.strip() for column in failed.split(",")}

        table_name = self.model.__table__.name
        errors = []
        for spec in self.schema.unique_fields:
            names = self._unique_constraint_names(spec.attribute)
            if (
                constraint_name in names
                or any(f'"{name}"' in headline for name in names)
                or f"{table_name}.{spec.attribute}" in sqlite_columns
            ):
                errors.append(FieldError(spec.name, spec.unique_message))
        return errors

    def _unique_constraint_names(self, attribute: str) -> List[str]:
        """Names of the table's unique constraints that include this column."""
        return [
            constraint.name.lower()
            for constraint in self.model.__table__.constraints
            if isinstance(constraint, UniqueConstraint)
            and isinstance(constraint.name, str)
            and attribute in constraint.columns.keys()
        ]

    def _store_error(
        self,
        operation: str,
        exc: SQLAlchemyError,
        row_id: Optional[int] = None,
    ) -> DatabaseError:
        """Wrap a SQLAlchemy failure, keeping the driver's own message."""
        message = str(getattr(exc, "orig", None) or exc)
        logger.error(
            "Database error during %s %s%s: %s",
            self.schema.name,
            operation,
            f" (id={row_id})" if row_id is not None else "",
            message,
        )
        context: Dict[str, Any] = {
            "resource": self.schema.name,
            "operation": operation,
            "error_type": type(exc).__name__,
        }
        if row_id is not None:
            context["id"] = row_id
        return DatabaseError(message=message, context=context)

    def _to_response(self, row: Any) -> ResourceModel:
        return self.schema.response_model.model_validate(row)

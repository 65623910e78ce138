"""
Storefront Backend — Resource Route Handlers
==============================================

What:  Builds the five CRUD routes for a resource from its ResourceService.
How:   create_resource_router() closes over one service and returns an
       APIRouter mounted at /<resource>. Handlers only read the request and
       pick the status code; everything else happens in the service.
Who:   main.py mounts one router per entry in resource_services.

Route table (per resource):
    GET    /<resource>        → 200 JSON array (query-string filters apply)
    GET    /<resource>/{id}   → 200 JSON object, or null when missing
    POST   /<resource>        → 201 created row
    PUT    /<resource>        → 200 updated row, or null when missing
    DELETE /<resource>/{id}   → 200 empty body

Path ids and JSON bodies are taken as raw values so malformed input reaches
the validator and comes back as a 400 listing every problem, instead of
FastAPI's 422.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

CLIENT_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    500: {"description": "Store error", "model": ErrorResponse},
}


def create_resource_router(service: ResourceService) -> APIRouter:
    """Return an APIRouter exposing list/get/create/update/delete for `service`."""
    schema = service.schema
    response_model = schema.response_model
    router = APIRouter(prefix=f"/{schema.name}", tags=[schema.title])

    @router.get(
        "",
        response_model=List[response_model],
        responses=CLIENT_ERRORS,
        summary=f"List {schema.name} records",
        description=(
            "Returns every record. Recognized query-string keys filter the "
            "result (all must match); unknown keys are ignored."
            if schema.filters else "Returns every record."
        ),
    )
    async def list_resources(
        request: Request,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.list_resources(db, request.query_params)

    @router.get(
        "/{resource_id}",
        response_model=Optional[response_model],
        responses=CLIENT_ERRORS,
        summary=f"Get one {schema.name} by id",
    )
    async def get_resource(
        resource_id: str,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.get_resource(db, resource_id)

    @router.post(
        "",
        status_code=201,
        response_model=response_model,
        responses=CLIENT_ERRORS,
        summary=f"Create a {schema.name}",
    )
    async def create_resource(
        payload: Optional[Dict[str, Any]] = Body(default=None),
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.create_resource(db, payload or {})

    @router.put(
        "",
        response_model=Optional[response_model],
        responses=CLIENT_ERRORS,
        summary=f"Update a {schema.name}",
        description="The body must carry the id of the record to update.",
    )
    async def update_resource(
        payload: Optional[Dict[str, Any]] = Body(default=None),
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.update_resource(db, payload or {})

    @router.delete(
        "/{resource_id}",
        responses=CLIENT_ERRORS,
        summary=f"Delete a {schema.name} by id",
        description="Succeeds whether or not a record had this id.",
    )
    async def delete_resource(
        resource_id: str,
        db: AsyncSession = Depends(get_db_session),
    ) -> Response:
        await service.delete_resource(db, resource_id)
        return Response(status_code=200, media_type="application/json")

    return router

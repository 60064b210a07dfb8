"""
Pocket Writer Backend — Template Route Handlers
================================================

What:  POST /api/templates, GET /api/templates, GET /api/templates/{id}.
Who:   Called by the mobile client's template builder and template picker.

The list endpoint returns a bare JSON array because the client decodes it
as List<Template>; the total count travels in the X-Total-Count header.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pocketwriter.database import get_db_session
from pocketwriter.schemas.system import ErrorResponse
from pocketwriter.schemas.template import TemplateCreateRequest, TemplateResponse
from pocketwriter.services.template_service import template_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["Templates"])


@router.post(
    "",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "structureDescription is not valid JSON", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a template",
)
async def create_template(
    request: TemplateCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TemplateResponse:
    return await template_service.create_template(db, request)


@router.get(
    "",
    response_model=List[TemplateResponse],
    responses={
        400: {"description": "Unknown sort field or direction", "model": ErrorResponse},
    },
    summary="List templates",
)
async def list_templates(
    response: Response,
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(default=50, ge=1, le=100, description="Page size (max 100)"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_dir: str = Query(default="desc", alias="sortDir"),
    db: AsyncSession = Depends(get_db_session),
) -> List[TemplateResponse]:
    templates, total = await template_service.list_templates(
        db, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
    )
    response.headers["X-Total-Count"] = str(total)
    return templates


@router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    responses={
        404: {"description": "Template not found", "model": ErrorResponse},
    },
    summary="Get a single template by ID",
)
async def get_template(
    template_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> TemplateResponse:
    return await template_service.get_template(db, template_id)

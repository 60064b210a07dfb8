"""
Pocket Writer Backend — Article Route Handlers
===============================================

What:  POST /api/articles, GET /api/articles (feed), GET /api/articles/{id}.
Who:   Called by the mobile client's editor, feed and reader screens.

Feed paging:
    GET /api/articles?page=0&size=10&sortBy=createdAt&sortDir=desc

    Zero-based pages, size capped at 100. sortBy accepts createdAt,
    updatedAt, title or id (snake_case spellings too).
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from pocketwriter.database import get_db_session
from pocketwriter.schemas.article import (
    ArticleCreateRequest,
    ArticleFeedPage,
    ArticleResponse,
)
from pocketwriter.schemas.system import ErrorResponse
from pocketwriter.services.article_service import article_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["Articles"])


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "contentData is not valid JSON", "model": ErrorResponse},
        404: {"description": "Referenced template does not exist", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an article",
)
async def create_article(
    request: ArticleCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ArticleResponse:
    """
    Create an article, optionally bound to a template.

    The article body (contentData) is stored verbatim after a JSON
    well-formedness check.
    """
    return await article_service.create_article(db, request)


@router.get(
    "",
    response_model=ArticleFeedPage,
    responses={
        400: {"description": "Unknown sort field or direction", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Article feed",
)
async def list_articles(
    page: int = Query(default=0, ge=0, description="Zero-based page index"),
    size: int = Query(default=10, ge=1, le=100, description="Items per page (max 100)"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_dir: str = Query(default="desc", alias="sortDir"),
    db: AsyncSession = Depends(get_db_session),
) -> ArticleFeedPage:
    return await article_service.list_articles(
        db, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
    )


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    responses={
        404: {"description": "Article not found", "model": ErrorResponse},
    },
    summary="Get a single article by ID",
)
async def get_article(
    article_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ArticleResponse:
    return await article_service.get_article(db, article_id)

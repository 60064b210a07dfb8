"""
Pocket Writer Backend — Article Service
========================================

What:  Business logic for articles: create, paged feed, fetch.
How:   Same pattern as TemplateService. The session is injected per call,
       ORM rows are mapped to response schemas here so routes stay thin.
Who:   Called by routes/articles.py and by the startup seeder.

Create Flow (POST /api/articles):
    ┌───────────────┐    ┌──────────────────┐    ┌──────────┐
    │ contentData   │───▶│ templateId       │───▶│  Insert  │
    │ is JSON?      │    │ exists? (if set) │    │  (DB)    │
    └───────────────┘    └──────────────────┘    └──────────┘
          │ no                  │ no
          ▼                     ▼
     ValidationError       NotFoundError
         (400)                (404)
"""

import logging
import math

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pocketwriter.exceptions import DatabaseError, NotFoundError
from pocketwriter.models.article import Article
from pocketwriter.schemas.article import (
    ArticleCreateRequest,
    ArticleFeedItem,
    ArticleFeedPage,
    ArticleResponse,
)
from pocketwriter.services.json_payload import ensure_valid_json
from pocketwriter.services.sorting import order_clause
from pocketwriter.services.template_service import template_service

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Business logic layer for article operations.

    Responsibilities:
        - create_article(): validate payload and template reference, insert
        - list_articles(): one page of the feed with Spring-style metadata
        - get_article(): single lookup with not-found handling
    """

    async def create_article(
        self, db: AsyncSession, request: ArticleCreateRequest
    ) -> ArticleResponse:
        """
        Insert a new article.

        Raises:
            ValidationError: content_data is not valid JSON (→ 400)
            NotFoundError: template_id references no template (→ 404)
            DatabaseError: insert failed (→ 500)
        """
        ensure_valid_json(request.content_data, "contentData")

        if request.template_id is not None:
            try:
                exists = await template_service.template_exists(db, request.template_id)
            except Exception as e:
                logger.error("Database error checking template %s: %s", request.template_id, str(e))
                raise DatabaseError(
                    message="Could not create the article. Please try again.",
                    context={"template_id": request.template_id},
                )
            if not exists:
                raise NotFoundError(resource="template", resource_id=str(request.template_id))

        try:
            article = Article(
                title=request.title,
                content_data=request.content_data,
                preview_text=request.preview_text,
                thumbnail_url=request.thumbnail_url,
                template_id=request.template_id,
            )
            db.add(article)
            await db.flush()
            logger.info("Article created: %s (id=%s)", article.title, article.id)
            return ArticleResponse.model_validate(article)
        except Exception as e:
            logger.error("Database error creating article: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the article. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_articles(
        self,
        db: AsyncSession,
        page: int = 0,
        size: int = 10,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> ArticleFeedPage:
        """
        Return one page of the article feed.

        Pagination is offset based and zero-indexed. The page document keeps
        the field names the mobile client parses (totalElements, last, ...).
        A page past the end is returned empty with correct totals.
        """
        ordering = order_clause(Article, sort_by, sort_dir)

        try:
            count_result = await db.execute(select(func.count(Article.id)))
            total = count_result.scalar() or 0

            result = await db.execute(
                select(Article).order_by(*ordering).offset(page * size).limit(size)
            )
            articles = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing articles: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve articles. Please try again.",
                context={"page": page, "size": size},
            )

        total_pages = math.ceil(total / size) if size else 0
        items = [ArticleFeedItem.model_validate(a) for a in articles]

        return ArticleFeedPage(
            content=items,
            total_elements=total,
            total_pages=total_pages,
            number=page,
            size=size,
            number_of_elements=len(items),
            first=page == 0,
            last=page >= total_pages - 1,
            empty=len(items) == 0,
        )

    async def get_article(self, db: AsyncSession, article_id: int) -> ArticleResponse:
        """
        Fetch one article by id.

        Raises:
            NotFoundError: no article with that id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(select(Article).where(Article.id == article_id))
            article = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching article %s: %s", article_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the article. Please try again.",
                context={"article_id": article_id},
            )

        if article is None:
            raise NotFoundError(resource="article", resource_id=str(article_id))

        return ArticleResponse.model_validate(article)


# ── Singleton Instance ────────────────────────────────────────────────────
article_service = ArticleService()

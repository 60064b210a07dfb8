"""
Pocket Writer Backend — Template Service
=========================================

What:  Business logic for templates: create, list, fetch.
How:   Validates the JSON payload, talks to the database through the
       per-request AsyncSession, maps ORM rows to TemplateResponse.
Who:   Called by routes/templates.py and by the startup seeder.

Error Handling Strategy:
    Application errors (ValidationError, NotFoundError) propagate as-is.
    Anything else coming out of SQLAlchemy is logged and wrapped in
    DatabaseError so no query text reaches the client.
"""

import logging
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pocketwriter.exceptions import DatabaseError, NotFoundError
from pocketwriter.models.template import Template
from pocketwriter.schemas.template import TemplateCreateRequest, TemplateResponse
from pocketwriter.services.json_payload import ensure_valid_json
from pocketwriter.services.sorting import order_clause

logger = logging.getLogger(__name__)


class TemplateService:
    """
    Stateless service; every method receives the session it should use.

    Responsibilities:
        - create_template(): validate + insert
        - list_templates(): sorted, paged listing with total count
        - get_template(): single lookup with not-found handling
        - template_exists(): cheap check used by ArticleService
    """

    async def create_template(
        self, db: AsyncSession, request: TemplateCreateRequest
    ) -> TemplateResponse:
        """
        Insert a new template.

        Raises:
            ValidationError: structure_description is not valid JSON (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        ensure_valid_json(request.structure_description, "structureDescription")

        try:
            template = Template(
                name=request.name,
                structure_description=request.structure_description,
            )
            db.add(template)
            await db.flush()
            logger.info("Template created: %s (id=%s)", template.name, template.id)
            return TemplateResponse.model_validate(template)
        except Exception as e:
            logger.error("Database error creating template: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the template. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_templates(
        self,
        db: AsyncSession,
        page: int = 0,
        size: int = 50,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> Tuple[List[TemplateResponse], int]:
        """
        Return one page of templates and the total template count.

        The route returns the list as a plain JSON array (the mobile client
        expects List<Template>) and the total in X-Total-Count.
        """
        ordering = order_clause(Template, sort_by, sort_dir)

        try:
            result = await db.execute(
                select(Template).order_by(*ordering).offset(page * size).limit(size)
            )
            templates = list(result.scalars().all())

            count_result = await db.execute(select(func.count(Template.id)))
            total = count_result.scalar() or 0

            return [TemplateResponse.model_validate(t) for t in templates], total
        except Exception as e:
            logger.error("Database error listing templates: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve templates. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_template(self, db: AsyncSession, template_id: int) -> TemplateResponse:
        """
        Fetch one template by id.

        Raises:
            NotFoundError: no template with that id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(select(Template).where(Template.id == template_id))
            template = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching template %s: %s", template_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the template. Please try again.",
                context={"template_id": template_id},
            )

        if template is None:
            raise NotFoundError(resource="template", resource_id=str(template_id))

        return TemplateResponse.model_validate(template)

    async def template_exists(self, db: AsyncSession, template_id: int) -> bool:
        result = await db.execute(select(Template.id).where(Template.id == template_id))
        return result.scalar_one_or_none() is not None

    async def count_templates(self, db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Template.id)))
        return result.scalar() or 0


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; safe to share across requests
template_service = TemplateService()

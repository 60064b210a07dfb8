"""
Startup seeding: two starter templates and a welcome article.

Runs once from the lifespan hook when the templates table is empty. Any
failure is logged and swallowed so a seeding problem never blocks startup.
"""

import json
import logging

from pocketwriter.database import async_session_factory
from pocketwriter.schemas.article import ArticleCreateRequest
from pocketwriter.schemas.template import TemplateCreateRequest
from pocketwriter.services.article_service import article_service
from pocketwriter.services.template_service import template_service

logger = logging.getLogger(__name__)

SAMPLE_IMAGE_URL = "https://images.unsplash.com/photo-1493976040374-85c8e12f0c0e"


def _element(element_id, kind, x, y, width, height, placeholder=None):
    element = {
        "element_id": element_id,
        "type": kind,
        "position": {"x_percentage": x, "y_percentage": y},
        "size": {"width_percentage": width, "height_percentage": height},
    }
    if placeholder:
        element["default_properties"] = {"placeholder_text": placeholder}
    return element


SIMPLE_BLOG_POST = [
    _element("title1", "text_block", 5, 5, 90, 10, "Main Title..."),
    _element("image1", "image_placeholder", 5, 20, 90, 30),
    _element("content1", "text_block", 5, 55, 90, 40, "Start writing content..."),
]

TWO_COLUMN_LAYOUT = [
    _element("col_text_1", "text_block", 5, 5, 43, 90, "Left column text"),
    _element("col_text_2", "text_block", 52, 5, 43, 90, "Right column text"),
]

WELCOME_ARTICLE = {
    "article_elements": [
        {"template_element_id_ref": "title1", "type": "text_block",
         "content": {"text": "Hello World!"}},
        {"template_element_id_ref": "image1", "type": "image",
         "content": {"image_url": SAMPLE_IMAGE_URL}},
        {"template_element_id_ref": "content1", "type": "text_block",
         "content": {"text": "This is a sample article seeded on startup. You can edit or delete it."}},
    ]
}


async def seed_initial_data() -> bool:
    """
    Seed starter content if the database has no templates yet.

    Returns True when data was inserted, False when skipped or failed.
    """
    try:
        async with async_session_factory() as session:
            logger.info("Checking if initial data needs to be seeded...")
            if await template_service.count_templates(session) > 0:
                logger.info("Initial data already exists. Skipping seed.")
                return False

            blog = await template_service.create_template(
                session,
                TemplateCreateRequest(
                    name="Simple Blog Post",
                    structure_description=json.dumps(SIMPLE_BLOG_POST),
                ),
            )
            columns = await template_service.create_template(
                session,
                TemplateCreateRequest(
                    name="Two Column Layout",
                    structure_description=json.dumps(TWO_COLUMN_LAYOUT),
                ),
            )
            logger.info("Created templates: %s (id=%s), %s (id=%s)",
                        blog.name, blog.id, columns.name, columns.id)

            article = await article_service.create_article(
                session,
                ArticleCreateRequest(
                    title="Welcome to Pocket Writer!",
                    content_data=json.dumps(WELCOME_ARTICLE),
                    preview_text="Get started with your first AI-powered content creation experience.",
                    thumbnail_url=SAMPLE_IMAGE_URL,
                    template_id=blog.id,
                ),
            )
            logger.info("Created article: %s (id=%s)", article.title, article.id)

            await session.commit()
            logger.info("Data seeding completed successfully.")
            return True
    except Exception as e:
        logger.error("Error during data initialization: %s", e, exc_info=True)
        return False

from pocketwriter.schemas.article import (
    ArticleCreateRequest,
    ArticleFeedItem,
    ArticleFeedPage,
    ArticleResponse,
)
from pocketwriter.schemas.system import (
    DatabaseHealthResponse,
    DetailedServerInfoResponse,
    ErrorResponse,
    HealthResponse,
    PingResponse,
    ServerInfoResponse,
)
from pocketwriter.schemas.template import TemplateCreateRequest, TemplateResponse

__all__ = [
    "ArticleCreateRequest",
    "ArticleFeedItem",
    "ArticleFeedPage",
    "ArticleResponse",
    "DatabaseHealthResponse",
    "DetailedServerInfoResponse",
    "ErrorResponse",
    "HealthResponse",
    "PingResponse",
    "ServerInfoResponse",
    "TemplateCreateRequest",
    "TemplateResponse",
]

"""
Pocket Writer — REST Client
============================

What:  Typed async wrapper over the backend's /api endpoints.
How:   httpx.AsyncClient underneath; responses are parsed with the same
       pydantic schemas the server serializes with, requests are sent
       with camelCase keys.
Who:   Scripts, tests and any Python front end that talks to the backend
       after discovery has resolved an endpoint.

Errors:
    Any transport failure, non-2xx status or unparseable body raises
    ApiClientError. For HTTP errors it carries the status code and the
    server's `message` field when the body is the standard error document.

Usage:
    async with PocketWriterClient.from_endpoint(endpoint) as client:
        page = await client.list_articles(page=0, size=10)
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError as SchemaError

from pocketwriter.discovery.models import BackendEndpoint
from pocketwriter.exceptions import ApiClientError
from pocketwriter.schemas.article import (
    ArticleCreateRequest,
    ArticleFeedPage,
    ArticleResponse,
)
from pocketwriter.schemas.system import PingResponse
from pocketwriter.schemas.template import TemplateCreateRequest, TemplateResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEFAULT_TIMEOUT = 10.0

_template_list = TypeAdapter(List[TemplateResponse])


class PocketWriterClient:
    def __init__(
        self,
        api_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.api_url, timeout=timeout, transport=transport
        )

    @classmethod
    def from_endpoint(
        cls,
        endpoint: BackendEndpoint,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PocketWriterClient":
        return cls(endpoint.api_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "PocketWriterClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiClientError(
                message=f"Could not reach the backend at {self.api_url}: {e}",
                context={"path": path},
            )

        if response.is_error:
            raise ApiClientError(
                message=self._error_message(response),
                status_code=response.status_code,
                context={"path": path},
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Backend returned HTTP {response.status_code}"

    @staticmethod
    def _parse(response: httpx.Response, model: Type[M]) -> M:
        try:
            return model.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise ApiClientError(
                message=f"Unexpected response from backend: {e}",
                status_code=response.status_code,
            )

    @staticmethod
    def _body(request: BaseModel) -> Any:
        return request.model_dump(mode="json", by_alias=True, exclude_none=True)

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> PingResponse:
        return self._parse(await self._request("GET", "/ping"), PingResponse)

    # ── Templates ─────────────────────────────────────────────────────────

    async def create_template(self, request: TemplateCreateRequest) -> TemplateResponse:
        response = await self._request("POST", "/templates", json=self._body(request))
        return self._parse(response, TemplateResponse)

    async def list_templates(
        self,
        page: int = 0,
        size: int = 50,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> List[TemplateResponse]:
        response = await self._request(
            "GET",
            "/templates",
            params={"page": page, "size": size, "sortBy": sort_by, "sortDir": sort_dir},
        )
        try:
            return _template_list.validate_python(response.json())
        except (ValueError, SchemaError) as e:
            raise ApiClientError(
                message=f"Unexpected response from backend: {e}",
                status_code=response.status_code,
            )

    async def get_template(self, template_id: int) -> TemplateResponse:
        return self._parse(await self._request("GET", f"/templates/{template_id}"), TemplateResponse)

    # ── Articles ──────────────────────────────────────────────────────────

    async def create_article(self, request: ArticleCreateRequest) -> ArticleResponse:
        response = await self._request("POST", "/articles", json=self._body(request))
        return self._parse(response, ArticleResponse)

    async def list_articles(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> ArticleFeedPage:
        response = await self._request(
            "GET",
            "/articles",
            params={"page": page, "size": size, "sortBy": sort_by, "sortDir": sort_dir},
        )
        return self._parse(response, ArticleFeedPage)

    async def get_article(self, article_id: int) -> ArticleResponse:
        return self._parse(await self._request("GET", f"/articles/{article_id}"), ArticleResponse)

"""
PocketWriterClient against a scripted backend.

The handler below plays the server: it answers with the camelCase
documents the real routes produce and records what the client sent.
"""

import json

import httpx
import pytest
import pytest_asyncio

from pocketwriter.client import PocketWriterClient
from pocketwriter.discovery.models import BackendEndpoint
from pocketwriter.exceptions import ApiClientError
from pocketwriter.schemas.article import ArticleCreateRequest
from pocketwriter.schemas.template import TemplateCreateRequest

TEMPLATE = {
    "id": 1,
    "name": "Simple Blog Post",
    "structureDescription": "[]",
    "createdAt": "2024-05-01T12:00:00Z",
    "updatedAt": "2024-05-01T12:00:00Z",
}

ARTICLE = {
    "id": 7,
    "title": "Welcome",
    "contentData": "{}",
    "templateId": 1,
    "createdAt": "2024-05-01T12:00:00Z",
    "updatedAt": "2024-05-01T12:00:00Z",
}


class ScriptedBackend:
    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/ping":
            return httpx.Response(200, json={
                "status": "up", "message": "Server is running",
                "timestamp": "2024-05-01 12:00:00", "version": "1.0.0",
            })
        if path == "/api/templates" and request.method == "POST":
            return httpx.Response(201, json=TEMPLATE)
        if path == "/api/templates":
            return httpx.Response(200, json=[TEMPLATE], headers={"X-Total-Count": "1"})
        if path == "/api/articles" and request.method == "POST":
            return httpx.Response(201, json=ARTICLE)
        if path == "/api/articles":
            return httpx.Response(200, json={
                "content": [{"id": 7, "title": "Welcome", "createdAt": "2024-05-01T12:00:00Z"}],
                "totalElements": 1, "totalPages": 1, "number": 0, "size": 10,
                "numberOfElements": 1, "first": True, "last": True, "empty": False,
            })
        if path == "/api/articles/7":
            return httpx.Response(200, json=ARTICLE)
        if path == "/api/articles/99":
            return httpx.Response(404, json={
                "error": "not_found", "message": "Article with ID 99 not found",
                "path": path, "request_id": "abc12345",
            })
        return httpx.Response(500, text="boom")


@pytest.fixture
def backend():
    return ScriptedBackend()


@pytest_asyncio.fixture
async def client(backend):
    async with PocketWriterClient(
        "http://test/api", transport=httpx.MockTransport(backend)
    ) as c:
        yield c


@pytest.mark.asyncio
async def test_ping(client):
    ping = await client.ping()
    assert ping.status == "up"
    assert ping.version == "1.0.0"


@pytest.mark.asyncio
async def test_create_template_sends_camel_case(client, backend):
    created = await client.create_template(
        TemplateCreateRequest(name="Simple Blog Post", structure_description="[]")
    )

    assert created.id == 1
    sent = json.loads(backend.requests[-1].content)
    assert sent == {"name": "Simple Blog Post", "structureDescription": "[]"}


@pytest.mark.asyncio
async def test_list_templates_passes_paging(client, backend):
    templates = await client.list_templates(page=2, size=5, sort_by="name", sort_dir="asc")

    assert [t.name for t in templates] == ["Simple Blog Post"]
    params = backend.requests[-1].url.params
    assert params["page"] == "2"
    assert params["sortBy"] == "name"
    assert params["sortDir"] == "asc"


@pytest.mark.asyncio
async def test_create_article_omits_unset_fields(client, backend):
    article = await client.create_article(
        ArticleCreateRequest(title="Welcome", content_data="{}", template_id=1)
    )

    assert article.template_id == 1
    sent = json.loads(backend.requests[-1].content)
    assert sent == {"title": "Welcome", "contentData": "{}", "templateId": 1}


@pytest.mark.asyncio
async def test_article_feed_and_detail(client):
    page = await client.list_articles()
    assert page.total_elements == 1
    assert page.first and page.last and not page.empty

    article = await client.get_article(7)
    assert article.content_data == "{}"


@pytest.mark.asyncio
async def test_error_carries_status_and_server_message(client):
    with pytest.raises(ApiClientError) as exc_info:
        await client.get_article(99)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Article with ID 99 not found"


@pytest.mark.asyncio
async def test_error_without_json_body(client):
    with pytest.raises(ApiClientError) as exc_info:
        await client.get_template(3)

    assert exc_info.value.status_code == 500
    assert "HTTP 500" in exc_info.value.message


@pytest.mark.asyncio
async def test_transport_failure():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    endpoint = BackendEndpoint(host="10.0.2.2", port=8080)
    async with PocketWriterClient.from_endpoint(endpoint, transport=httpx.MockTransport(refuse)) as c:
        assert c.api_url == "http://10.0.2.2:8080/api"
        with pytest.raises(ApiClientError) as exc_info:
            await c.ping()

    assert exc_info.value.status_code is None

"""Unit tests for HttpRebuildExecutor adapter."""

import json

import httpx
import pytest

from deltaindex.domain.shared.error import RebuildError
from deltaindex.infrastructure.http.rebuild_executor import HttpRebuildExecutor


class Article:
    def __init__(self, id: int) -> None:
        self.id = id


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url="http://indexer.test", transport=httpx.MockTransport(handler)
    )


class TestHttpRebuildExecutor:
    @pytest.mark.asyncio
    async def test_posts_instance_rebuild(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(202)

        async with make_client(handler) as client:
            executor = HttpRebuildExecutor(client=client)
            await executor.rebuild(Article, Article(7), index="articles")

        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert requests[0].url == "http://indexer.test/indexes/articles/rebuild"
        assert json.loads(requests[0].content) == {"record_type": "Article", "record_id": "7"}

    @pytest.mark.asyncio
    async def test_type_level_rebuild_has_no_record_id(self):
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        async with make_client(handler) as client:
            await HttpRebuildExecutor(client=client).rebuild(Article, None, index="articles")

        assert bodies == [{"record_type": "Article", "record_id": None}]

    @pytest.mark.asyncio
    async def test_custom_id_attribute(self):
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200)

        class Keyed:
            srn = "urn:article:1"

        async with make_client(handler) as client:
            executor = HttpRebuildExecutor(client=client, id_attribute="srn")
            await executor.rebuild(Keyed, Keyed(), index="articles")

        assert bodies[0]["record_id"] == "urn:article:1"

    @pytest.mark.asyncio
    async def test_http_error_raises_rebuild_error(self):
        async with make_client(lambda request: httpx.Response(503)) as client:
            executor = HttpRebuildExecutor(client=client)
            with pytest.raises(RebuildError, match="HTTP 503") as exc_info:
                await executor.rebuild(Article, None, index="articles")

        assert exc_info.value.index == "articles"
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_transport_error_raises_rebuild_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            executor = HttpRebuildExecutor(client=client)
            with pytest.raises(RebuildError, match="unreachable"):
                await executor.rebuild(Article, Article(1), index="articles")

"""Tests for the introspection client."""

import asyncio
import json

import httpx
import pytest

from gql_opgen.core.auth import BearerAuth
from gql_opgen.core.introspection import (
    IntrospectionClient,
    SchemaFetchError,
    fetch_schema,
)
from gql_opgen.core.schema import IntrospectionError

URL = "https://api.example.com/graphql"


def mock_transport(status=200, json_body=None, text=None, requests=None):
    """Build a transport answering every request with one canned response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json_body)

    return httpx.MockTransport(handler)


def fetch(client: IntrospectionClient):
    async def run():
        async with client:
            return await client.fetch_schema()

    return asyncio.run(run())


class TestFetchSchema:
    """Successful introspection."""

    def test_builds_schema(self, user_introspection):
        transport = mock_transport(json_body={"data": user_introspection})
        schema = fetch(IntrospectionClient(URL, transport=transport))
        assert list(schema.query_type.fields) == ["user"]

    def test_posts_introspection_query(self, user_introspection):
        requests = []
        transport = mock_transport(json_body={"data": user_introspection}, requests=requests)
        fetch(IntrospectionClient(URL, transport=transport))

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Content-Type"] == "application/json"
        body = json.loads(request.content)
        assert "__schema" in body["query"]

    def test_passes_auth_and_headers(self, user_introspection):
        requests = []
        transport = mock_transport(json_body={"data": user_introspection}, requests=requests)
        client = IntrospectionClient(
            URL,
            auth=BearerAuth("secret"),
            headers={"X-Tenant": "acme"},
            transport=transport,
        )
        fetch(client)

        headers = requests[0].headers
        assert headers["Authorization"] == "Bearer secret"
        assert headers["X-Tenant"] == "acme"

    def test_no_auth_by_default(self, user_introspection):
        requests = []
        transport = mock_transport(json_body={"data": user_introspection}, requests=requests)
        fetch(IntrospectionClient(URL, transport=transport))
        assert "Authorization" not in requests[0].headers

    def test_fetch_schema_helper(self, user_introspection):
        transport = mock_transport(json_body={"data": user_introspection})
        schema = asyncio.run(fetch_schema(URL, transport=transport, timeout=5.0))
        assert schema.get_type("User") is not None


class TestFetchErrors:
    """Failures while fetching."""

    def test_http_error_status(self):
        transport = mock_transport(status=503, json_body={"message": "down"})
        with pytest.raises(SchemaFetchError) as exc_info:
            fetch(IntrospectionClient(URL, transport=transport))
        assert "503" in str(exc_info.value)
        assert "Service Unavailable" in str(exc_info.value)

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = IntrospectionClient(URL, transport=httpx.MockTransport(handler))
        with pytest.raises(SchemaFetchError) as exc_info:
            fetch(client)
        assert "connection refused" in str(exc_info.value)

    def test_non_json_body(self):
        transport = mock_transport(text="<html>Not GraphQL</html>")
        with pytest.raises(SchemaFetchError):
            fetch(IntrospectionClient(URL, transport=transport))

    def test_graphql_errors(self):
        body = {"errors": [{"message": "GraphQL introspection is not allowed"}]}
        transport = mock_transport(json_body=body)
        with pytest.raises(IntrospectionError) as exc_info:
            fetch(IntrospectionClient(URL, transport=transport))
        assert exc_info.value.errors == body["errors"]


class TestClientLifecycle:
    """Client creation and cleanup."""

    def test_close_resets_client(self, user_introspection):
        transport = mock_transport(json_body={"data": user_introspection})
        client = IntrospectionClient(URL, transport=transport)

        async def run():
            await client.fetch_introspection()
            assert client._client is not None
            await client.close()

        asyncio.run(run())
        assert client._client is None

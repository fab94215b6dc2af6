"""Introspection client for fetching a schema from a GraphQL endpoint.

Handles HTTP communication, error handling, and response parsing.
"""

from typing import Any

import httpx
from graphql import GraphQLSchema, get_introspection_query

from .auth import Auth, NoAuth
from .schema import schema_from_introspection


class SchemaFetchError(Exception):
    """Exception raised when the schema cannot be fetched."""


class IntrospectionClient:
    """Fetches a schema by running the standard introspection query.

    Examples:
        async with IntrospectionClient(url) as client:
            schema = await client.fetch_schema()

        # Authenticated endpoint with extra headers
        client = IntrospectionClient(url, auth=BearerAuth(token), headers={"X-Tenant": "a"})
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            headers: Extra headers sent with the request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self._auth = auth or NoAuth()
        self._headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            headers.update(self._auth.get_headers())
            headers.update(self._headers)

            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "IntrospectionClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def fetch_introspection(self) -> dict[str, Any]:
        """POST the introspection query and return the decoded response body.

        Raises:
            SchemaFetchError: On network errors, non-success status or a non-JSON body
        """
        client = await self._get_client()

        try:
            response = await client.post(self.url, json={"query": get_introspection_query()})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SchemaFetchError(
                f"Failed to fetch schema: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"Failed to fetch schema: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise SchemaFetchError(f"Endpoint did not return JSON: {e}") from e

    async def fetch_schema(self) -> GraphQLSchema:
        """Fetch and build the endpoint's schema.

        Raises:
            SchemaFetchError: If the request fails
            IntrospectionError: If the response carries GraphQL errors
        """
        result = await self.fetch_introspection()
        return schema_from_introspection(result)


async def fetch_schema(url: str, **kwargs: Any) -> GraphQLSchema:
    """Fetch a schema with a short-lived client."""
    async with IntrospectionClient(url, **kwargs) as client:
        return await client.fetch_schema()

"""Credentials for the schema introspection request.

Endpoints that hide their schema behind authentication need a header on
the introspection POST. An auth object only supplies those headers; the
introspection client merges them with its own and sends them unchanged.
"""

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Anything that can supply headers for the introspection request.

    A schema registry that expects an API key, for instance:

        class RegistryKeyAuth:
            def __init__(self, key: str):
                self.key = key

            def get_headers(self) -> dict[str, str]:
                return {"X-Api-Key": self.key}
    """

    def get_headers(self) -> Dict[str, str]:
        ...


class BearerAuth:
    """Sends `Authorization: Bearer <token>`, as `--token` does."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class NoAuth:
    """Sends no credentials; used when no token is configured."""

    def get_headers(self) -> Dict[str, str]:
        return {}


def auth_for_token(token: str | None) -> Auth:
    """Pick the handler for an optional token; an empty token counts as none."""
    return BearerAuth(token) if token else NoAuth()

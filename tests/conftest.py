"""Shared fixtures for gql-opgen tests."""

import pytest
from graphql import build_client_schema, build_schema, introspection_from_schema

USER_SDL = """
type Query {
  user(id: ID!): User
}

type User {
  id: ID!
  name: String
  friends: [User]
}
"""

# Query, mutation, union, interface, enum and a two-type cycle in one place
SHOP_SDL = """
type Query {
  product(id: ID!): Product
  products(category: Category, limit: Int): [Product!]!
  search(term: String!): SearchResult
  node(id: ID!): Node
  version: String
}

type Mutation {
  createProduct(name: String!, tags: [String!]): Product
  ping: Boolean!
}

interface Node {
  id: ID!
}

enum Category {
  BOOKS
  GAMES
}

type Product implements Node {
  id: ID!
  name: String
  category: Category
  vendor: Vendor
}

type Vendor implements Node {
  id: ID!
  name: String
  products: [Product]
}

union SearchResult = Product | Vendor
"""


@pytest.fixture
def schema_from_sdl():
    """Build a schema from SDL the same way an introspected schema is built."""
    def _build(sdl: str):
        return build_client_schema(introspection_from_schema(build_schema(sdl)))

    return _build


@pytest.fixture
def user_schema(schema_from_sdl):
    return schema_from_sdl(USER_SDL)


@pytest.fixture
def shop_schema(schema_from_sdl):
    return schema_from_sdl(SHOP_SDL)


@pytest.fixture
def user_introspection():
    """Raw introspection result (the `data` part) for the user schema."""
    return introspection_from_schema(build_schema(USER_SDL))

"""GraphQL operation generator."""

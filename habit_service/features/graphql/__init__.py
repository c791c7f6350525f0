"""GraphQL API."""

"""GraphQL schema and types for metadata model queries."""

from __future__ import annotations

from odg_metamodel.graphql.schema import schema

__all__ = ["schema"]

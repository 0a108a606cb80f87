"""Database-backed ContactStore adapters."""

from contactor.infrastructure.persistence.neo4j_store import Neo4jContactStore

__all__ = ["Neo4jContactStore"]

"""Infrastructure layer: concrete implementations of application ports."""

from contactor.infrastructure.file_store import JsonFileContactStore
from contactor.infrastructure.memory_store import InMemoryContactStore
from contactor.infrastructure.persistence.neo4j_store import Neo4jContactStore
from contactor.infrastructure.phone import normalize_phone, phone_normalizer
from contactor.infrastructure.vcard_export import entity_to_vcard, export_vcards

__all__ = [
    "InMemoryContactStore",
    "JsonFileContactStore",
    "Neo4jContactStore",
    "entity_to_vcard",
    "export_vcards",
    "normalize_phone",
    "phone_normalizer",
]

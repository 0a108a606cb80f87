"""
Contactor core: clean-architecture layout.

- domain: ContactEntity and value objects, ContactRecord, multi-value parsing. No outer dependencies.
- application: use cases (ContactService, ContactSearch, ContactWriter, GroupManager,
  VcardSerializer), the ContactStore port, the context object, errors.
- infrastructure: adapters (InMemoryContactStore, JsonFileContactStore, Neo4jContactStore),
  vCard base export, phone normalization.
"""

from contactor.application import (
    ContactCreated,
    ContactorContext,
    ContactorError,
    ContactService,
    ContactStore,
    Invalid,
    NotSaved,
    PermissionDenied,
    PhotoError,
    StoreError,
)
from contactor.domain import ContactEntity, ContactRecord, Group, LabeledValue
from contactor.infrastructure import (
    InMemoryContactStore,
    JsonFileContactStore,
    Neo4jContactStore,
)

__all__ = [
    "ContactCreated",
    "ContactEntity",
    "ContactRecord",
    "ContactService",
    "ContactStore",
    "ContactorContext",
    "ContactorError",
    "Group",
    "InMemoryContactStore",
    "Invalid",
    "JsonFileContactStore",
    "LabeledValue",
    "Neo4jContactStore",
    "NotSaved",
    "PermissionDenied",
    "PhotoError",
    "StoreError",
]

"""In-memory implementation of ContactStore (no DB)."""

import uuid
from dataclasses import replace

from contactor.application.errors import StoreError
from contactor.domain import WILDCARD, ContactEntity, Group
from contactor.infrastructure.vcard_export import export_vcards

LOCAL_CONTAINER_ID = "local"


def name_matches(entity: ContactEntity, pattern: str) -> bool:
    """Every word of pattern is a case-insensitive prefix of some name word. "*" matches all."""
    if pattern.strip() == WILDCARD:
        return True
    words = pattern.casefold().split()
    if not words:
        return False
    tokens = [t.casefold() for t in entity.name_tokens()]
    return all(any(t.startswith(w) for t in tokens) for w in words)


class InMemoryContactStore:
    """Stores contacts and groups in memory. Order preserved by insertion."""

    def __init__(self, *, granted: bool = True) -> None:
        self._granted = granted
        self._by_id: dict[str, ContactEntity] = {}
        self._groups: dict[str, Group] = {}
        self._members: dict[str, list[str]] = {}  # group_id -> contact ids

    def request_access(self) -> bool:
        return self._granted

    def default_container_id(self) -> str | None:
        return LOCAL_CONTAINER_ID

    def find_by_name(self, pattern: str) -> list[ContactEntity]:
        return [e for e in self._by_id.values() if name_matches(e, pattern)]

    def find_by_identifiers(self, identifiers: list[str]) -> list[ContactEntity]:
        wanted = set(identifiers)
        return [e for pid, e in self._by_id.items() if pid in wanted]

    def find_by_group(self, group_id: str) -> list[ContactEntity]:
        return [
            self._by_id[pid] for pid in self._members.get(group_id, []) if pid in self._by_id
        ]

    def list_groups(self, identifiers: list[str] | None = None) -> list[Group]:
        if identifiers is None:
            return list(self._groups.values())
        wanted = set(identifiers)
        return [g for gid, g in self._groups.items() if gid in wanted]

    def save(
        self,
        entity: ContactEntity,
        container_id: str | None = None,
        group_id: str | None = None,
    ) -> str:
        if group_id and group_id not in self._groups:
            raise StoreError(f"Group {group_id} does not exist.")
        identifier = entity.identifier or str(uuid.uuid4())
        if identifier in self._by_id:
            raise StoreError(f"Contact {identifier} already exists.")
        self._by_id[identifier] = replace(entity, identifier=identifier)
        if group_id:
            self._members[group_id].append(identifier)
        return identifier

    def update(self, entity: ContactEntity) -> None:
        if entity.identifier not in self._by_id:
            raise StoreError(f"Contact {entity.identifier} does not exist.")
        self._by_id[entity.identifier] = entity

    def delete(self, entity: ContactEntity) -> None:
        if self._by_id.pop(entity.identifier, None) is None:
            raise StoreError(f"Contact {entity.identifier} does not exist.")
        for members in self._members.values():
            if entity.identifier in members:
                members.remove(entity.identifier)

    def save_group(self, group: Group) -> Group:
        identifier = group.identifier or str(uuid.uuid4())
        if identifier in self._groups:
            raise StoreError(f"Group {identifier} already exists.")
        stored = replace(group, identifier=identifier)
        self._groups[identifier] = stored
        self._members[identifier] = []
        return stored

    def delete_group(self, group: Group) -> None:
        if self._groups.pop(group.identifier, None) is None:
            raise StoreError(f"Group {group.identifier} does not exist.")
        self._members.pop(group.identifier, None)

    def export_vcard(self, entities: list[ContactEntity]) -> bytes:
        return export_vcards(entities)

"""ContactStore kept in memory and written through to a JSON file after every change."""

import json
import logging
import os
from pathlib import Path

from contactor.application.errors import StoreError
from contactor.domain import ContactEntity, Group
from contactor.infrastructure.memory_store import InMemoryContactStore
from contactor.infrastructure.serialization import (
    entity_from_dict,
    entity_to_dict,
    group_from_dict,
    group_to_dict,
)

logger = logging.getLogger(__name__)

FILE_VERSION = 1


class JsonFileContactStore(InMemoryContactStore):
    """
    Loads the whole address book on construction; a missing file is an empty book.
    Writes replace the file atomically (temp file + rename).
    """

    def __init__(self, path: Path, *, granted: bool = True) -> None:
        super().__init__(granted=granted)
        self._path = Path(path).expanduser()
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def save(
        self,
        entity: ContactEntity,
        container_id: str | None = None,
        group_id: str | None = None,
    ) -> str:
        identifier = super().save(entity, container_id=container_id, group_id=group_id)
        self._flush()
        return identifier

    def update(self, entity: ContactEntity) -> None:
        super().update(entity)
        self._flush()

    def delete(self, entity: ContactEntity) -> None:
        super().delete(entity)
        self._flush()

    def save_group(self, group: Group) -> Group:
        stored = super().save_group(group)
        self._flush()
        return stored

    def delete_group(self, group: Group) -> None:
        super().delete_group(group)
        self._flush()

    def _load(self) -> None:
        if not self._path.exists():
            logger.debug("No address book at %s yet", self._path)
            return
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            contacts = [entity_from_dict(item) for item in data.get("contacts", [])]
            groups = [group_from_dict(item) for item in data.get("groups", [])]
            members = {gid: list(ids) for gid, ids in data.get("members", {}).items()}
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StoreError(f"Could not read address book {self._path}: {exc}") from exc

        self._by_id = {c.identifier: c for c in contacts}
        self._groups = {g.identifier: g for g in groups}
        self._members = {gid: members.get(gid, []) for gid in self._groups}

    def _flush(self) -> None:
        data = {
            "version": FILE_VERSION,
            "contacts": [entity_to_dict(c) for c in self._by_id.values()],
            "groups": [group_to_dict(g) for g in self._groups.values()],
            "members": self._members,
        }
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except OSError as exc:
            raise StoreError(f"Could not write address book {self._path}: {exc}") from exc

"""Resolve a filter string to contact entities: by name, by identifier, or by full-field scan."""

import logging

from contactor.application.context import ContactorContext
from contactor.application.errors import StoreError
from contactor.domain import WILDCARD, ContactEntity, ContactRecord

logger = logging.getLogger(__name__)


class ContactSearch:
    """
    Shallow search asks the store for name matches and falls back to an
    identifier match. Deep search scans every field of every contact.
    Result order is whatever the store returns.
    """

    def __init__(self, context: ContactorContext) -> None:
        self._store = context.store

    def find(self, filter: str, deep: bool = False) -> list[ContactEntity]:
        if not deep:
            return self._find_shallow(filter)

        shallow_ids = {e.identifier for e in self._find_shallow(filter)}
        return [
            entity
            for entity in self._find_shallow(WILDCARD)
            if entity.identifier in shallow_ids
            or ContactRecord.from_entity(entity).matches_substring(filter)
        ]

    def exists(self, filter: str, deep: bool = False) -> int:
        """Number of contacts matching filter. Zero means not found."""
        return len(self.find(filter, deep=deep))

    def _find_shallow(self, filter: str) -> list[ContactEntity]:
        try:
            contacts = self._store.find_by_name(filter)
            if not contacts:
                contacts = self._store.find_by_identifiers([filter])
        except StoreError as exc:
            logger.warning("Contact lookup for %r failed: %s", filter, exc)
            return []
        return list(contacts)

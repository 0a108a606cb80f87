"""Group lookup, creation, membership listing and cascading removal."""

import logging

from contactor.application.context import ContactorContext
from contactor.application.errors import StoreError
from contactor.domain import ContactEntity, Group

logger = logging.getLogger(__name__)


class GroupManager:
    def __init__(self, context: ContactorContext) -> None:
        self._store = context.store

    def find_or_create(self, name: str) -> Group:
        """Existing group with exactly this name (case-sensitive), else a new stored one.

        StoreError propagates: without a group there is nothing sensible to return.
        """
        for group in self._store.list_groups():
            if group.name == name:
                return group
        group = self._store.save_group(Group(name=name))
        logger.info("Created group %r (%s)", group.name, group.identifier)
        return group

    def get(self, group_id: str) -> Group | None:
        try:
            groups = self._store.list_groups([group_id])
        except StoreError as exc:
            logger.warning("Group lookup for %r failed: %s", group_id, exc)
            return None
        return groups[0] if groups else None

    def list_groups(self) -> list[Group]:
        try:
            return self._store.list_groups()
        except StoreError as exc:
            logger.warning("Listing groups failed: %s", exc)
            return []

    def list_members(self, group_id: str) -> list[ContactEntity]:
        try:
            return self._store.find_by_group(group_id)
        except StoreError as exc:
            logger.warning("Member lookup for group %r failed: %s", group_id, exc)
            return []

    def remove_group(self, group_id: str) -> bool:
        """Delete every member contact, then the group.

        Returns False when the group does not exist (nothing is touched) or when
        a deletion fails. A failed member deletion leaves the group in place;
        members deleted before the failure stay deleted.
        """
        group = self.get(group_id)
        if group is None:
            return False

        try:
            members = self._store.find_by_group(group_id)
        except StoreError as exc:
            logger.error("Could not list members of group %r: %s", group_id, exc)
            return False

        for member in members:
            try:
                self._store.delete(member)
            except StoreError as exc:
                logger.error(
                    "Removing group %r stopped at member %s: %s",
                    group_id,
                    member.identifier,
                    exc,
                )
                return False

        try:
            self._store.delete_group(group)
        except StoreError as exc:
            logger.error("Error removing group %r: %s", group_id, exc)
            return False
        return True

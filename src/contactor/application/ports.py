"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactor.domain import ContactEntity, Group


class ContactStore(Protocol):
    """Holds contacts and groups. Every method may raise StoreError."""

    def request_access(self) -> bool:
        """Ask for access to the store once. False means access was denied."""
        ...

    def default_container_id(self) -> str | None:
        """Identifier of the container new contacts are saved into, or None."""
        ...

    def find_by_name(self, pattern: str) -> list[ContactEntity]:
        """Contacts whose name matches pattern. "*" returns every contact. Order is store-defined."""
        ...

    def find_by_identifiers(self, identifiers: list[str]) -> list[ContactEntity]:
        """Contacts with one of the given identifiers."""
        ...

    def find_by_group(self, group_id: str) -> list[ContactEntity]:
        """Contacts that are members of the group."""
        ...

    def list_groups(self, identifiers: list[str] | None = None) -> list[Group]:
        """All groups, or only those with the given identifiers."""
        ...

    def save(
        self,
        entity: ContactEntity,
        container_id: str | None = None,
        group_id: str | None = None,
    ) -> str:
        """Store a new contact and return its assigned identifier."""
        ...

    def update(self, entity: ContactEntity) -> None:
        """Replace the stored contact that has entity.identifier."""
        ...

    def delete(self, entity: ContactEntity) -> None:
        """Delete the contact (and its group memberships)."""
        ...

    def save_group(self, group: Group) -> Group:
        """Store a new group and return it with its assigned identifier."""
        ...

    def delete_group(self, group: Group) -> None:
        """Delete the group record. Members are not touched."""
        ...

    def export_vcard(self, entities: list[ContactEntity]) -> bytes:
        """vCard data for the entities, without photos."""
        ...

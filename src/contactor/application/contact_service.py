"""Contact search, add, update and removal, plus group operations. What the CLI calls."""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from contactor.application.context import ContactorContext
from contactor.application.dto import ContactCreated, Invalid, NotSaved
from contactor.application.errors import StoreError
from contactor.application.groups import GroupManager
from contactor.application.rendering import (
    FORMAT_CSV,
    FORMAT_FILE,
    FORMAT_TEXT,
    FORMAT_VCF,
    render_csv,
    render_text,
    render_vcf,
    write_vcf_files,
)
from contactor.application.search import ContactSearch
from contactor.application.vcf import VcardSerializer
from contactor.application.writer import ContactWriter
from contactor.config import DEFAULT_OUTPUT_DIR
from contactor.domain import WILDCARD, ContactEntity, Group

logger = logging.getLogger(__name__)

NAME_REQUIRED = "A first or last name is required."


def _has_name(entity: ContactEntity) -> bool:
    return bool(entity.given_name.strip() or entity.family_name.strip())


class ContactService:
    """Core flows: search/list/exists, add -> confirm, update, remove, groups."""

    def __init__(
        self,
        context: ContactorContext,
        *,
        normalize_phone: Callable[[str], str] | None = None,
        output_dir: Path | None = None,
    ) -> None:
        self._store = context.store
        self._search = ContactSearch(context)
        self._serializer = VcardSerializer(context)
        self._groups = GroupManager(context)
        self._writer = ContactWriter(context, normalize_phone=normalize_phone)
        self._output_dir = output_dir or DEFAULT_OUTPUT_DIR

    def search_contacts(
        self,
        filter: str = WILDCARD,
        output_format: str = FORMAT_TEXT,
        output_dir: Path | None = None,
        deep: bool = False,
    ) -> str | bytes:
        """Matching contacts in the requested format. vcf returns bytes, the others text."""
        contacts = self._search.find(filter, deep=deep)
        return self._render(filter, contacts, output_format, output_dir)

    def list_contacts(
        self, output_format: str = FORMAT_TEXT, output_dir: Path | None = None
    ) -> str | bytes:
        return self.search_contacts(WILDCARD, output_format, output_dir)

    def contact_exists(self, filter: str, deep: bool = False) -> int:
        return self._search.exists(filter, deep=deep)

    def get_contact(self, identifier: str) -> ContactEntity | None:
        """Contact with exactly this identifier, or None."""
        try:
            contacts = self._store.find_by_identifiers([identifier])
        except StoreError as exc:
            logger.warning("Lookup of contact %s failed: %s", identifier, exc)
            return None
        return contacts[0] if contacts else None

    def add_contact(
        self, props: Mapping[str, str], group: str = ""
    ) -> ContactCreated | Invalid | NotSaved:
        """Create a contact, optionally in the named group (created when missing).

        Raises PhotoError when props["pic"] names an unreadable file.
        """
        entity = self._writer.build_entity(props)
        if not _has_name(entity):
            return Invalid(reason=NAME_REQUIRED)

        group_id = ""
        group_name = (group or "").strip()
        if group_name:
            try:
                group_id = self._groups.find_or_create(group_name).identifier
            except StoreError as exc:
                logger.error("Could not resolve group %r: %s", group_name, exc)
                return NotSaved(reason=f"Group {group_name!r} could not be created.")

        identifier = self._writer.save_new(entity, group_id=group_id)
        if identifier is None:
            return NotSaved()
        return ContactCreated(
            identifier=identifier, summary=self.search_contacts(identifier)
        )

    def update_contact(self, identifier: str, props: Mapping[str, str]) -> bool | Invalid:
        """Apply props to an existing contact.

        False when it does not exist or the store refuses; Invalid when the change
        would leave it without a first and last name. Raises PhotoError like add_contact.
        """
        existing = self.get_contact(identifier)
        if existing is None:
            return False
        entity = self._writer.build_entity(props, existing=existing)
        if not _has_name(entity):
            return Invalid(reason=NAME_REQUIRED)
        return self._writer.save_changes(entity)

    def remove_contact(self, identifier: str) -> bool:
        existing = self.get_contact(identifier)
        if existing is None:
            return False
        try:
            self._store.delete(existing)
        except StoreError as exc:
            logger.error("Error removing contact: %s", exc)
            return False
        return True

    def list_groups(self) -> list[Group]:
        return self._groups.list_groups()

    def group_members(
        self,
        group_id: str,
        output_format: str = FORMAT_TEXT,
        output_dir: Path | None = None,
    ) -> str | bytes:
        members = self._groups.list_members(group_id)
        return self._render(group_id, members, output_format, output_dir)

    def remove_group(self, group_id: str) -> bool:
        return self._groups.remove_group(group_id)

    def _render(
        self,
        filter: str,
        contacts: list[ContactEntity],
        output_format: str,
        output_dir: Path | None,
    ) -> str | bytes:
        if output_format == FORMAT_TEXT:
            return render_text(filter, contacts)
        if output_format == FORMAT_CSV:
            return render_csv(contacts)
        if output_format == FORMAT_VCF:
            return render_vcf(contacts, self._serializer)
        if output_format == FORMAT_FILE:
            return write_vcf_files(
                contacts, self._serializer, output_dir or self._output_dir
            )
        raise ValueError(f"Unknown output format: {output_format!r}")

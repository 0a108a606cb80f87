"""Build contact entities from untyped property maps and persist them."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from pathlib import Path

from contactor.application.context import ContactorContext
from contactor.application.errors import PhotoError, StoreError
from contactor.domain import (
    LABEL_HOME,
    LABEL_IPHONE,
    Birthday,
    ContactEntity,
    LabeledValue,
    PostalAddress,
    parse_labeled_values,
)

logger = logging.getLogger(__name__)

# Property-map key -> ContactEntity attribute.
SCALAR_KEYS = {
    "first": "given_name",
    "last": "family_name",
    "middle": "middle_name",
    "nickname": "nickname",
    "company": "organization",
    "department": "department",
    "title": "job_title",
    "note": "note",
}

# Property-map key -> PostalAddress attribute.
ADDRESS_KEYS = {
    "street": "street",
    "city": "city",
    "state": "state",
    "zip": "postal_code",
    "country": "country",
}


def _text(props: Mapping[str, str], key: str) -> str:
    return (props.get(key) or "").strip()


def _parse_birthday(props: Mapping[str, str]) -> Birthday | None:
    """Birthday from day/month (and optional year) keys; None unless day and month are numeric."""
    day = _text(props, "birthday")
    month = _text(props, "birthmonth")
    if not (day.isdecimal() and month.isdecimal()):
        return None
    year = _text(props, "birthyear")
    try:
        return Birthday(
            day=int(day),
            month=int(month),
            year=int(year) if year.isdecimal() else None,
        )
    except ValueError:
        return None


def _read_photo(path: str) -> bytes:
    try:
        return Path(path).expanduser().read_bytes()
    except OSError as exc:
        raise PhotoError(f"Could not read photo {path}: {exc}") from exc


class ContactWriter:
    """
    Add/update path. Keys missing from the property map leave the entity's
    current value alone (empty for a new contact).
    """

    def __init__(
        self,
        context: ContactorContext,
        *,
        normalize_phone: Callable[[str], str] | None = None,
    ) -> None:
        self._store = context.store
        self._container_id = context.container_id
        self._normalize_phone = normalize_phone

    def build_entity(
        self, props: Mapping[str, str], existing: ContactEntity | None = None
    ) -> ContactEntity:
        """New entity (or a changed copy of existing). Raises PhotoError for an unreadable pic."""
        base = existing if existing is not None else ContactEntity()
        changes: dict = {
            attr: _text(props, key) for key, attr in SCALAR_KEYS.items() if key in props
        }

        address_changes = {
            attr: _text(props, key) for key, attr in ADDRESS_KEYS.items() if key in props
        }
        if any(address_changes.values()):
            current = base.postal_addresses[0] if base.postal_addresses else PostalAddress()
            changes["postal_addresses"] = (
                replace(current, **address_changes),
            ) + base.postal_addresses[1:]

        phones = [
            LabeledValue(label=v.label, value=self._phone(v.value))
            for v in parse_labeled_values(props.get("phone"), LABEL_IPHONE)
            if v.value
        ]
        if phones:
            changes["phone_numbers"] = tuple(phones)

        emails = [v for v in parse_labeled_values(props.get("email"), LABEL_HOME) if v.value]
        if emails:
            changes["email_addresses"] = tuple(emails)

        birthday = _parse_birthday(props)
        if birthday is not None:
            changes["birthday"] = birthday

        pic = _text(props, "pic")
        if pic:
            changes["image_data"] = _read_photo(pic)
            changes["image_data_available"] = True

        return replace(base, **changes)

    def create(self, props: Mapping[str, str], group_id: str = "") -> str | None:
        """Store a new contact. Returns its identifier, or None when the store refused it."""
        return self.save_new(self.build_entity(props), group_id=group_id)

    def save_new(self, entity: ContactEntity, group_id: str = "") -> str | None:
        target_group = self._resolve_group(group_id) if group_id else None
        try:
            identifier = self._store.save(
                entity, container_id=self._container_id, group_id=target_group
            )
        except StoreError as exc:
            logger.error("Error storing contact: %s", exc)
            return None
        logger.info("Stored contact %s", identifier)
        return identifier

    def update(self, existing: ContactEntity, props: Mapping[str, str]) -> bool:
        return self.save_changes(self.build_entity(props, existing=existing))

    def save_changes(self, entity: ContactEntity) -> bool:
        try:
            self._store.update(entity)
        except StoreError as exc:
            logger.error("Error updating contact %s: %s", entity.identifier, exc)
            return False
        return True

    def _phone(self, value: str) -> str:
        if self._normalize_phone is None:
            return value
        return self._normalize_phone(value)

    def _resolve_group(self, group_id: str) -> str | None:
        try:
            groups = self._store.list_groups([group_id])
        except StoreError as exc:
            logger.warning("Group lookup for %r failed: %s", group_id, exc)
            return None
        if not groups:
            logger.warning("Group %r not found; contact saved without a group.", group_id)
            return None
        return groups[0].identifier

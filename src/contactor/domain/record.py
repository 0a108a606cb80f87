"""ContactRecord: flat, string-only projection of a ContactEntity for output and search."""

import calendar
import csv
import io
from dataclasses import dataclass

from contactor.domain.entities import (
    CONTACT_TYPE_ORGANIZATION,
    ContactEntity,
    LabeledValue,
)

# Placeholder markers the store wraps around its built-in labels ("_$!<Home>!$_").
_LABEL_MARKERS = ("_$!<", ">!$_")


def _strip_markers(value: str) -> str:
    for marker in _LABEL_MARKERS:
        value = value.replace(marker, "")
    return value


def _flatten(values: tuple[LabeledValue, ...]) -> str:
    if not values:
        return ""
    return "\n" + "".join(f"{v.label}: {v.value}\n" for v in values)


def _format_address(entity: ContactEntity) -> str:
    address = ""
    for row in entity.postal_addresses:
        if row.is_complete():
            address = (
                f"\n{row.street}\n{row.city}, {row.state} {row.postal_code} {row.country}"
            )
    return address


def _format_birthday(entity: ContactEntity) -> str:
    if entity.birthday is None:
        return ""
    return f"{calendar.month_name[entity.birthday.month]} {entity.birthday.day}"


@dataclass(frozen=True)
class ContactRecord:
    """
    Every field is a string; "" stands for absent.
    Column order is CONTACT_FIELDS, which is also the CSV column order.
    """

    id: str = ""
    type: str = ""
    name_prefix: str = ""
    given_name: str = ""
    middle_name: str = ""
    family_name: str = ""
    previous_family_name: str = ""
    name_suffix: str = ""
    nickname: str = ""
    postal_address: str = ""
    organization: str = ""
    department: str = ""
    job_title: str = ""
    birthday: str = ""
    notes: str = ""
    phone_numbers: str = ""
    email_addresses: str = ""
    url_addresses: str = ""
    social_profiles: str = ""
    instant_message_addresses: str = ""

    @classmethod
    def from_entity(cls, entity: ContactEntity) -> "ContactRecord":
        """Build the record for one entity. Never fails; missing data renders as ""."""
        is_business = entity.contact_type == CONTACT_TYPE_ORGANIZATION
        return cls(
            id=entity.identifier or "",
            type="Business" if is_business else "Individual",
            name_prefix=entity.name_prefix or "",
            given_name=entity.given_name or "",
            middle_name=entity.middle_name or "",
            family_name=entity.family_name or "",
            previous_family_name=entity.previous_family_name or "",
            name_suffix=entity.name_suffix or "",
            nickname=entity.nickname or "",
            postal_address=_format_address(entity),
            organization=entity.organization or "",
            department=entity.department or "",
            job_title=entity.job_title or "",
            birthday=_format_birthday(entity),
            notes=entity.note or "",
            phone_numbers=_flatten(entity.phone_numbers),
            email_addresses=_flatten(entity.email_addresses),
            url_addresses=_flatten(entity.url_addresses),
            social_profiles=_flatten(entity.social_profiles),
            instant_message_addresses=_flatten(entity.instant_message_addresses),
        )

    def values(self) -> list[tuple[str, str]]:
        """(column, value) pairs in canonical order."""
        return [(column, getattr(self, attr)) for column, attr in CONTACT_FIELDS]

    def as_dict(self) -> dict[str, str]:
        return dict(self.values())

    def render_text(self) -> str:
        output = ""
        for column, value in self.values():
            output += f"{column}: {_strip_markers(value)}\n"
            output = output.replace("\n\n", "\n")
        return output

    def render_csv_row(self) -> str:
        row = [_strip_markers(value).strip() for _, value in self.values()]
        return _csv_line(row)

    @classmethod
    def csv_header(cls) -> str:
        return _csv_line([column for column, _ in cls().values()])

    def matches_substring(self, needle: str) -> bool:
        """Case-insensitive substring test over every field; stops at the first hit."""
        needle = needle.casefold()
        for _, value in self.values():
            if needle in value.casefold():
                return True
        return False


def _csv_line(row: list[str]) -> str:
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="").writerow(row)
    return buf.getvalue()


# Canonical (column, attribute) table. Output order and the CSV header come from here.
CONTACT_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("type", "type"),
    ("namePrefix", "name_prefix"),
    ("givenName", "given_name"),
    ("middleName", "middle_name"),
    ("familyName", "family_name"),
    ("previousFamilyName", "previous_family_name"),
    ("nameSuffix", "name_suffix"),
    ("nickname", "nickname"),
    ("postalAddress", "postal_address"),
    ("organization", "organization"),
    ("department", "department"),
    ("jobTitle", "job_title"),
    ("birthday", "birthday"),
    ("notes", "notes"),
    ("phoneNumbers", "phone_numbers"),
    ("emailAddresses", "email_addresses"),
    ("urlAddresses", "url_addresses"),
    ("socialProfiles", "social_profiles"),
    ("instantMessageAddresses", "instant_message_addresses"),
)

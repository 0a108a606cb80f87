"""Domain entities: ContactEntity, its value objects, and Group."""

import calendar
from dataclasses import dataclass, field

# Labels as the contact store vocabulary spells them. Markers are stripped on render.
LABEL_HOME = "_$!<Home>!$_"
LABEL_WORK = "_$!<Work>!$_"
LABEL_OTHER = "_$!<Other>!$_"
LABEL_IPHONE = "iPhone"

CONTACT_TYPE_PERSON = "person"
CONTACT_TYPE_ORGANIZATION = "organization"

# Name pattern that matches every contact in the store.
WILDCARD = "*"


@dataclass(frozen=True)
class LabeledValue:
    """One entry of a multi-valued contact field (phone, email, URL, ...)."""

    label: str = ""
    value: str = ""


@dataclass(frozen=True)
class PostalAddress:
    label: str = LABEL_HOME
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    def is_complete(self) -> bool:
        """Street, city, state and postal code are all present."""
        return bool(self.street and self.city and self.state and self.postal_code)


@dataclass(frozen=True)
class Birthday:
    """
    Day and month of birth; the year is optional.
    Out-of-range parts are rejected so rendering never has to guess.
    """

    day: int
    month: int
    year: int | None = None

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError("Birthday month must be between 1 and 12.")
        # Without a year, February 29 is allowed.
        last_day = calendar.monthrange(self.year or 2000, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise ValueError(
                f"Birthday day must be between 1 and {last_day} for month {self.month}."
            )


@dataclass(frozen=True)
class ContactEntity:
    """
    A contact as the store holds it.
    The identifier is empty until the store assigns one on save.
    Never mutated in place: changes produce a new instance (dataclasses.replace).
    """

    identifier: str = ""
    contact_type: str = CONTACT_TYPE_PERSON
    name_prefix: str = ""
    given_name: str = ""
    middle_name: str = ""
    family_name: str = ""
    previous_family_name: str = ""
    name_suffix: str = ""
    nickname: str = ""
    organization: str = ""
    department: str = ""
    job_title: str = ""
    postal_addresses: tuple[PostalAddress, ...] = ()
    birthday: Birthday | None = None
    note: str = ""
    image_data: bytes | None = field(default=None, repr=False)
    thumbnail_image_data: bytes | None = field(default=None, repr=False)
    image_data_available: bool = False
    phone_numbers: tuple[LabeledValue, ...] = ()
    email_addresses: tuple[LabeledValue, ...] = ()
    url_addresses: tuple[LabeledValue, ...] = ()
    social_profiles: tuple[LabeledValue, ...] = ()
    instant_message_addresses: tuple[LabeledValue, ...] = ()

    def name_tokens(self) -> list[str]:
        """Words of every name-like field, in display order."""
        parts = (
            self.name_prefix,
            self.given_name,
            self.middle_name,
            self.family_name,
            self.previous_family_name,
            self.name_suffix,
            self.nickname,
            self.organization,
        )
        return [word for part in parts for word in part.split()]

    def display_name(self) -> str:
        parts = (
            self.name_prefix,
            self.given_name,
            self.middle_name,
            self.family_name,
            self.name_suffix,
        )
        name = " ".join(p.strip() for p in parts if p and p.strip())
        return name or self.organization.strip()


@dataclass(frozen=True)
class Group:
    """A named contact group. Membership lives in the store, not on the entity."""

    identifier: str = ""
    name: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Group name must be non-empty.")

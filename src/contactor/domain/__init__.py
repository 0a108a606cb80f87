"""Domain layer: contact entities, the flattened record, and multi-value parsing. No outer dependencies."""

from contactor.domain.entities import (
    CONTACT_TYPE_ORGANIZATION,
    CONTACT_TYPE_PERSON,
    LABEL_HOME,
    LABEL_IPHONE,
    LABEL_OTHER,
    LABEL_WORK,
    WILDCARD,
    Birthday,
    ContactEntity,
    Group,
    LabeledValue,
    PostalAddress,
)
from contactor.domain.multivalue import parse_labeled_values
from contactor.domain.record import CONTACT_FIELDS, ContactRecord

__all__ = [
    "CONTACT_FIELDS",
    "CONTACT_TYPE_ORGANIZATION",
    "CONTACT_TYPE_PERSON",
    "LABEL_HOME",
    "LABEL_IPHONE",
    "LABEL_OTHER",
    "LABEL_WORK",
    "WILDCARD",
    "Birthday",
    "ContactEntity",
    "ContactRecord",
    "Group",
    "LabeledValue",
    "PostalAddress",
    "parse_labeled_values",
]

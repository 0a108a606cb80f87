"""Plain-dict form of entities and groups for the file and Neo4j stores."""

import base64
from dataclasses import asdict

from contactor.domain import Birthday, ContactEntity, Group, LabeledValue, PostalAddress

LABELED_FIELDS = (
    "phone_numbers",
    "email_addresses",
    "url_addresses",
    "social_profiles",
    "instant_message_addresses",
)


def _encode_bytes(data: bytes | None) -> str | None:
    if data is None:
        return None
    return base64.b64encode(data).decode("ascii")


def _decode_bytes(data: str | None) -> bytes | None:
    if not data:
        return None
    return base64.b64decode(data)


def entity_to_dict(entity: ContactEntity) -> dict:
    """JSON-safe dict. Image bytes are base64 text."""
    data = asdict(entity)
    data["image_data"] = _encode_bytes(entity.image_data)
    data["thumbnail_image_data"] = _encode_bytes(entity.thumbnail_image_data)
    return data


def entity_from_dict(data: dict) -> ContactEntity:
    """Inverse of entity_to_dict. Raises KeyError/TypeError/ValueError on malformed data."""
    data = dict(data)
    for name in LABELED_FIELDS:
        data[name] = tuple(LabeledValue(**item) for item in data.get(name) or ())
    data["postal_addresses"] = tuple(
        PostalAddress(**item) for item in data.get("postal_addresses") or ()
    )
    birthday = data.get("birthday")
    data["birthday"] = Birthday(**birthday) if birthday else None
    data["image_data"] = _decode_bytes(data.get("image_data"))
    data["thumbnail_image_data"] = _decode_bytes(data.get("thumbnail_image_data"))
    return ContactEntity(**data)


def group_to_dict(group: Group) -> dict:
    return asdict(group)


def group_from_dict(data: dict) -> Group:
    return Group(identifier=data["identifier"], name=data["name"])

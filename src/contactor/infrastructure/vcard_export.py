"""Base vCard 3.0 export of contact entities with vobject. Photos are not included."""

import vobject

from contactor.domain import (
    CONTACT_TYPE_ORGANIZATION,
    ContactEntity,
    LabeledValue,
)

_LABEL_MARKERS = ("_$!<", ">!$_")


def _type_param(label: str) -> str:
    for marker in _LABEL_MARKERS:
        label = label.replace(marker, "")
    return label.strip()


def _add_labeled(card, name: str, values: tuple[LabeledValue, ...]) -> None:
    for item in values:
        if not item.value:
            continue
        line = card.add(name)
        line.value = item.value
        label = _type_param(item.label)
        if label:
            line.type_param = label


def _formatted_name(entity: ContactEntity) -> str:
    return entity.display_name() or entity.nickname or entity.identifier or ""


def entity_to_vcard(entity: ContactEntity):
    """vobject vCard component for one entity."""
    card = vobject.vCard()
    card.add("n").value = vobject.vcard.Name(
        family=entity.family_name,
        given=entity.given_name,
        additional=entity.middle_name,
        prefix=entity.name_prefix,
        suffix=entity.name_suffix,
    )
    card.add("fn").value = _formatted_name(entity)

    if entity.identifier:
        card.add("uid").value = entity.identifier
    if entity.nickname:
        card.add("nickname").value = entity.nickname
    if entity.organization or entity.department:
        card.add("org").value = [entity.organization, entity.department]
    if entity.job_title:
        card.add("title").value = entity.job_title
    if entity.contact_type == CONTACT_TYPE_ORGANIZATION:
        card.add("x-abshowas").value = "COMPANY"

    _add_labeled(card, "tel", entity.phone_numbers)
    _add_labeled(card, "email", entity.email_addresses)
    _add_labeled(card, "url", entity.url_addresses)
    _add_labeled(card, "x-socialprofile", entity.social_profiles)
    _add_labeled(card, "impp", entity.instant_message_addresses)

    for address in entity.postal_addresses:
        adr = card.add("adr")
        adr.value = vobject.vcard.Address(
            street=address.street,
            city=address.city,
            region=address.state,
            code=address.postal_code,
            country=address.country,
        )
        label = _type_param(address.label)
        if label:
            adr.type_param = label

    if entity.birthday is not None:
        bday = entity.birthday
        if bday.year:
            card.add("bday").value = f"{bday.year:04d}-{bday.month:02d}-{bday.day:02d}"
        else:
            card.add("bday").value = f"--{bday.month:02d}{bday.day:02d}"
    if entity.note:
        card.add("note").value = entity.note
    return card


def export_vcards(entities: list[ContactEntity]) -> bytes:
    """One vCard block per entity, UTF-8 encoded, CRLF line endings."""
    return "".join(entity_to_vcard(e).serialize() for e in entities).encode("utf-8")

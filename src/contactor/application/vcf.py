"""vCard output with the contact photo embedded as base64."""

import base64

from contactor.application.context import ContactorContext
from contactor.application.errors import VcardFormatError
from contactor.domain import ContactEntity

END_MARKER = "END:VCARD"
PHOTO_PREFIX = "PHOTO;TYPE=JPEG;ENCODING=BASE64:"


def append_photo(vcard: bytes, photo: bytes) -> bytes:
    """Insert a PHOTO line right before the single END:VCARD of one vCard block."""
    try:
        text = vcard.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise VcardFormatError("vCard data is not valid UTF-8.") from exc
    lines = text.split("\n")
    # Only a whole line ends the block; "NOTE:END:VCARD" does not.
    ends = [i for i, line in enumerate(lines) if line.rstrip("\r") == END_MARKER]
    if len(ends) != 1:
        raise VcardFormatError(f"Expected exactly one {END_MARKER} line, found {len(ends)}.")
    carriage = "\r" if "\r\n" in text else ""
    photo_line = PHOTO_PREFIX + base64.b64encode(photo).decode("ascii")
    lines.insert(ends[0], photo_line + carriage)
    return "\n".join(lines).encode("utf-8")


class VcardSerializer:
    """Base vCard blocks come from the store; photos are spliced in here."""

    def __init__(self, context: ContactorContext) -> None:
        self._store = context.store

    def serialize(self, entities: list[ContactEntity]) -> bytes:
        """Concatenated vCard blocks in input order. StoreError propagates."""
        out = bytearray()
        for entity in entities:
            data = self._store.export_vcard([entity])
            if entity.image_data:
                data = append_photo(data, entity.image_data)
            out += data
        return bytes(out)

"""Error taxonomy shared by the application layer and the store adapters."""


class ContactorError(Exception):
    """Base class for every error raised by contactor."""


class PermissionDenied(ContactorError):
    """The contact store refused access. Fatal at startup."""


class StoreError(ContactorError):
    """A contact store call failed (fetch, save, update, delete or export)."""


class PhotoError(ContactorError):
    """The photo file given for a contact could not be read."""


class VcardFormatError(ContactorError):
    """Base vCard data is not UTF-8 or does not hold exactly one END:VCARD."""

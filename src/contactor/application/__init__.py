"""Application layer: use cases, ports, results and errors. Depends only on domain."""

from contactor.application.contact_service import ContactService
from contactor.application.context import ContactorContext
from contactor.application.dto import ContactCreated, Invalid, NotSaved
from contactor.application.errors import (
    ContactorError,
    PermissionDenied,
    PhotoError,
    StoreError,
    VcardFormatError,
)
from contactor.application.groups import GroupManager
from contactor.application.ports import ContactStore
from contactor.application.rendering import (
    FORMAT_CSV,
    FORMAT_FILE,
    FORMAT_TEXT,
    FORMAT_VCF,
    OUTPUT_FORMATS,
)
from contactor.application.search import ContactSearch
from contactor.application.vcf import VcardSerializer
from contactor.application.writer import ContactWriter

__all__ = [
    "FORMAT_CSV",
    "FORMAT_FILE",
    "FORMAT_TEXT",
    "FORMAT_VCF",
    "OUTPUT_FORMATS",
    "ContactCreated",
    "ContactSearch",
    "ContactService",
    "ContactStore",
    "ContactWriter",
    "ContactorContext",
    "ContactorError",
    "GroupManager",
    "Invalid",
    "NotSaved",
    "PermissionDenied",
    "PhotoError",
    "StoreError",
    "VcardFormatError",
    "VcardSerializer",
]

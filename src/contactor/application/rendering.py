"""Output formats for search results: text, CSV, concatenated VCF, and one VCF file per contact."""

import logging
from pathlib import Path

from contactor.application.errors import StoreError, VcardFormatError
from contactor.application.vcf import VcardSerializer
from contactor.domain import ContactEntity, ContactRecord

logger = logging.getLogger(__name__)

FORMAT_TEXT = "text"
FORMAT_CSV = "csv"
FORMAT_VCF = "vcf"
FORMAT_FILE = "file"
OUTPUT_FORMATS = (FORMAT_TEXT, FORMAT_CSV, FORMAT_VCF, FORMAT_FILE)


def render_text(filter: str, entities: list[ContactEntity]) -> str:
    output = f'Found {len(entities)} contacts matching "{filter}":\n\n'
    for entity in entities:
        output += ContactRecord.from_entity(entity).render_text() + "\n"
    return output


def render_csv(entities: list[ContactEntity]) -> str:
    output = ContactRecord.csv_header() + "\n"
    for entity in entities:
        output += ContactRecord.from_entity(entity).render_csv_row() + "\n"
    return output


def render_vcf(entities: list[ContactEntity], serializer: VcardSerializer) -> bytes:
    """Concatenated vCards. A contact whose export fails is logged and left out."""
    out = bytearray()
    for entity in entities:
        try:
            out += serializer.serialize([entity])
        except (StoreError, VcardFormatError) as exc:
            logger.error("Could not export contact %s: %s", entity.identifier, exc)
    return bytes(out)


def vcf_filename(entity: ContactEntity) -> str:
    """"<given> <family>.vcf", or "<identifier>.vcf" when both name parts are empty."""
    name = f"{entity.given_name} {entity.family_name}"
    if name == " ":
        name = entity.identifier
    return name.replace("/", "-") + ".vcf"


def write_vcf_files(
    entities: list[ContactEntity], serializer: VcardSerializer, directory: Path
) -> str:
    """Write one .vcf per contact into directory. Failed files are logged and skipped."""
    directory = Path(directory).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    written = 0
    for entity in entities:
        path = directory / vcf_filename(entity)
        try:
            path.write_bytes(serializer.serialize([entity]))
        except (OSError, StoreError, VcardFormatError) as exc:
            logger.error("Could not write %s: %s", path, exc)
            continue
        written += 1
    return f"{written} VCF file(s) written to {directory}"

"""Unit tests for ContactService. In-memory store and property maps only."""

import base64

import pytest

from contactor.application import (
    FORMAT_CSV,
    FORMAT_FILE,
    FORMAT_VCF,
    ContactCreated,
    ContactorContext,
    ContactService,
    Invalid,
    NotSaved,
    PermissionDenied,
    PhotoError,
    StoreError,
)
from contactor.application.rendering import vcf_filename
from contactor.domain import ContactEntity, ContactRecord
from contactor.infrastructure import InMemoryContactStore


class ReadOnlyStore(InMemoryContactStore):
    def save(self, entity, container_id=None, group_id=None):
        raise StoreError("read-only")

    def delete(self, entity):
        raise StoreError("read-only")


class BrokenExportStore(InMemoryContactStore):
    """Refuses to export any contact named Bob."""

    def export_vcard(self, entities):
        if any(e.given_name == "Bob" for e in entities):
            raise StoreError("export failed")
        return super().export_vcard(entities)


def _service(store: InMemoryContactStore | None = None, **kwargs) -> ContactService:
    return ContactService(ContactorContext.open(store or InMemoryContactStore()), **kwargs)


def _add(service: ContactService, **props) -> str:
    result = service.add_contact(props)
    assert isinstance(result, ContactCreated)
    return result.identifier


def test_open_requires_permission() -> None:
    with pytest.raises(PermissionDenied):
        ContactorContext.open(InMemoryContactStore(granted=False))
    context = ContactorContext.open(InMemoryContactStore())
    assert context.has_permission is True
    assert context.container_id == "local"


def test_add_then_search_by_family_name() -> None:
    service = _service()
    _add(service, first="Ann", last="Lee", phone="555-0001")

    text = service.search_contacts("Lee")
    assert text.startswith('Found 1 contacts matching "Lee":\n\n')
    assert "familyName: Lee\n" in text
    assert "555-0001" in text


def test_add_returns_text_summary_of_new_contact() -> None:
    service = _service()
    result = service.add_contact({"first": "Ann", "last": "Lee"})
    assert isinstance(result, ContactCreated)
    assert f'matching "{result.identifier}"' in result.summary
    assert f"id: {result.identifier}\n" in result.summary
    assert "givenName: Ann\n" in result.summary


def test_add_requires_first_or_last_name() -> None:
    service = _service()
    result = service.add_contact({"first": "  ", "phone": "555-0001"})
    assert isinstance(result, Invalid)
    assert "name" in result.reason.lower()
    assert service.contact_exists("*") == 0

    assert isinstance(service.add_contact({"last": "Lee"}), ContactCreated)


def test_add_store_failure_is_not_saved() -> None:
    result = _service(ReadOnlyStore()).add_contact({"first": "Ann"})
    assert isinstance(result, NotSaved)


def test_add_into_named_group_creates_it_once() -> None:
    service = _service()
    ann = service.add_contact({"first": "Ann"}, group="Friends")
    bob = service.add_contact({"first": "Bob"}, group="Friends")
    assert isinstance(ann, ContactCreated) and isinstance(bob, ContactCreated)

    [group] = service.list_groups()
    assert group.name == "Friends"
    members = service.group_members(group.identifier, FORMAT_CSV)
    assert members.count("\n") == 3


def test_csv_output_has_consistent_columns() -> None:
    service = _service()
    _add(service, first="Ann", last="Lee", phone="work:555-0001")
    _add(service, first="Bob", last="Stone", email="bob@example.com", note="x")
    _add(service, first="Carol", last="King", title="CEO")

    lines = service.search_contacts("*", FORMAT_CSV).rstrip("\n").split("\n")
    assert len(lines) == 4
    assert lines[0] == ContactRecord.csv_header()
    assert len({line.count(",") for line in lines}) == 1


def test_list_contacts_lists_everyone() -> None:
    service = _service()
    _add(service, first="Ann")
    _add(service, first="Bob")
    text = service.list_contacts()
    assert text.startswith('Found 2 contacts matching "*":')


def test_vcf_output_is_bytes() -> None:
    service = _service()
    _add(service, first="Ann", last="Lee")
    _add(service, first="Bob", last="Stone")
    data = service.search_contacts("*", FORMAT_VCF)
    assert isinstance(data, bytes)
    assert data.decode("utf-8").count("END:VCARD") == 2


def test_file_output_writes_one_vcf_per_contact(tmp_path) -> None:
    service = _service(output_dir=tmp_path / "default")
    _add(service, first="Ann", last="Lee")
    message = service.search_contacts("Ann", FORMAT_FILE, output_dir=tmp_path / "out")
    assert message == f"1 VCF file(s) written to {tmp_path / 'out'}"
    assert (tmp_path / "out" / "Ann Lee.vcf").read_bytes().startswith(b"BEGIN:VCARD")

    service.list_contacts(FORMAT_FILE)
    assert (tmp_path / "default" / "Ann Lee.vcf").exists()


def test_unknown_format_raises() -> None:
    with pytest.raises(ValueError):
        _service().search_contacts("*", "xml")


def test_exists_shallow_and_deep() -> None:
    service = _service()
    _add(service, first="Ann", last="Lee", note="plays the cello")
    assert service.contact_exists("Ann") == 1
    assert service.contact_exists("cello") == 0
    assert service.contact_exists("cello", deep=True) == 1
    assert service.contact_exists("nobody", deep=True) == 0


def test_update_contact() -> None:
    service = _service()
    identifier = _add(service, first="Ann", last="Lee")
    assert service.update_contact(identifier, {"title": "CTO", "phone": "555-0009"}) is True
    contact = service.get_contact(identifier)
    assert contact.job_title == "CTO"
    assert contact.given_name == "Ann"
    assert [p.value for p in contact.phone_numbers] == ["555-0009"]
    assert service.update_contact("no-such-id", {"title": "CTO"}) is False


def test_remove_contact() -> None:
    service = _service()
    identifier = _add(service, first="Ann", last="Lee")
    assert service.remove_contact(identifier) is True
    assert service.get_contact(identifier) is None
    assert service.remove_contact(identifier) is False


def test_remove_contact_store_failure_returns_false() -> None:
    store = ReadOnlyStore()
    identifier = InMemoryContactStore.save(store, ContactEntity(given_name="Ann"))
    service = _service(store)
    assert service.remove_contact(identifier) is False
    assert service.get_contact(identifier) is not None


def test_remove_group_cascades() -> None:
    service = _service()
    service.add_contact({"first": "Ann"}, group="Club")
    service.add_contact({"first": "Bob"}, group="Club")
    _add(service, first="Carol")
    [group] = service.list_groups()

    assert service.remove_group(group.identifier) is True
    assert service.list_groups() == []
    assert service.contact_exists("*") == 1
    assert service.remove_group(group.identifier) is False


def test_vcf_filename_falls_back_to_identifier() -> None:
    assert vcf_filename(ContactEntity(identifier="abc", organization="Acme")) == "abc.vcf"
    assert vcf_filename(ContactEntity(identifier="abc", given_name="Ann")) == "Ann .vcf"
    assert vcf_filename(ContactEntity(given_name="A/B", family_name="C")) == "A-B C.vcf"


def test_add_with_unreadable_photo_creates_nothing(tmp_path) -> None:
    store = InMemoryContactStore()
    service = _service(store)
    with pytest.raises(PhotoError):
        service.add_contact({"first": "Ann", "pic": str(tmp_path / "missing.jpg")}, group="Club")
    assert store.list_groups() == []
    assert store.find_by_name("*") == []


def test_update_cannot_remove_both_names() -> None:
    service = _service()
    identifier = _add(service, first="Ann", last="Lee")

    result = service.update_contact(identifier, {"first": "", "last": " "})
    assert isinstance(result, Invalid)
    contact = service.get_contact(identifier)
    assert (contact.given_name, contact.family_name) == ("Ann", "Lee")

    assert service.update_contact(identifier, {"first": ""}) is True
    assert service.get_contact(identifier).family_name == "Lee"


def test_vcf_output_skips_contact_whose_export_fails() -> None:
    service = _service(BrokenExportStore())
    _add(service, first="Ann", last="Lee")
    _add(service, first="Bob", last="Stone")
    text = service.list_contacts(FORMAT_VCF).decode("utf-8")
    assert text.count("BEGIN:VCARD") == 1
    assert "FN:Ann Lee" in text
    assert "Bob" not in text


def test_file_output_skips_contact_whose_export_fails(tmp_path) -> None:
    service = _service(BrokenExportStore())
    _add(service, first="Ann", last="Lee")
    _add(service, first="Bob", last="Stone")
    message = service.list_contacts(FORMAT_FILE, output_dir=tmp_path)
    assert message == f"1 VCF file(s) written to {tmp_path}"
    assert (tmp_path / "Ann Lee.vcf").exists()
    assert not (tmp_path / "Bob Stone.vcf").exists()


def test_vcf_output_embeds_photo_of_added_contact(tmp_path) -> None:
    photo = tmp_path / "ann.jpg"
    photo.write_bytes(b"\xff\xd8jpeg")
    service = _service()
    _add(service, first="Ann", last="Lee", pic=str(photo))
    text = service.search_contacts("Ann", FORMAT_VCF).decode("utf-8")
    assert "PHOTO;TYPE=JPEG;ENCODING=BASE64:" + base64.b64encode(b"\xff\xd8jpeg").decode("ascii") in text
    assert text.index("PHOTO;") < text.index("END:VCARD")


def test_default_output_dir_comes_from_config() -> None:
    from contactor import config
    from contactor.application import contact_service

    assert contact_service.DEFAULT_OUTPUT_DIR is config.DEFAULT_OUTPUT_DIR

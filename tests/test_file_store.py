"""Tests for JsonFileContactStore: contacts, groups and photos survive a reload."""

import json

import pytest

from contactor.application import StoreError
from contactor.domain import Birthday, ContactEntity, Group, LabeledValue, PostalAddress
from contactor.infrastructure import JsonFileContactStore


def test_missing_file_is_empty_store(tmp_path) -> None:
    store = JsonFileContactStore(tmp_path / "book.json")
    assert store.find_by_name("*") == []
    assert not (tmp_path / "book.json").exists()


def test_round_trip_through_file(tmp_path) -> None:
    path = tmp_path / "nested" / "book.json"
    store = JsonFileContactStore(path)
    group = store.save_group(Group(name="Family"))
    entity = ContactEntity(
        given_name="Ann",
        family_name="Lee",
        birthday=Birthday(day=19, month=4),
        phone_numbers=(LabeledValue("iPhone", "555-0001"),),
        postal_addresses=(PostalAddress(street="1 Main St", city="X", state="Y", postal_code="1"),),
        image_data=b"\x00\xffphoto",
        image_data_available=True,
    )
    identifier = store.save(entity, group_id=group.identifier)

    reloaded = JsonFileContactStore(path)
    [contact] = reloaded.find_by_identifiers([identifier])
    assert contact.given_name == "Ann"
    assert contact.birthday == Birthday(day=19, month=4)
    assert contact.phone_numbers == (LabeledValue("iPhone", "555-0001"),)
    assert contact.postal_addresses == entity.postal_addresses
    assert contact.image_data == b"\x00\xffphoto"
    assert reloaded.list_groups() == [group]
    assert [c.identifier for c in reloaded.find_by_group(group.identifier)] == [identifier]


def test_deletes_are_written_through(tmp_path) -> None:
    path = tmp_path / "book.json"
    store = JsonFileContactStore(path)
    identifier = store.save(ContactEntity(given_name="Ann"))
    store.delete(store.find_by_identifiers([identifier])[0])
    assert JsonFileContactStore(path).find_by_name("*") == []
    assert json.loads(path.read_text(encoding="utf-8"))["contacts"] == []


def test_corrupt_file_raises_store_error(tmp_path) -> None:
    path = tmp_path / "book.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonFileContactStore(path)

"""Tests for ContactSearch: shallow name/identifier lookup, deep scan, failure handling."""

from contactor.application import ContactorContext, ContactSearch, StoreError
from contactor.domain import ContactEntity, LabeledValue
from contactor.infrastructure import InMemoryContactStore


class BrokenStore(InMemoryContactStore):
    def find_by_name(self, pattern):
        raise StoreError("store offline")


def _store() -> InMemoryContactStore:
    store = InMemoryContactStore()
    store.save(ContactEntity(given_name="Ann", family_name="Lee"))
    store.save(ContactEntity(given_name="Bob", family_name="Leeds", note="likes jazz"))
    store.save(
        ContactEntity(
            given_name="Carol",
            family_name="King",
            email_addresses=(LabeledValue("work", "carol@lee-partners.test"),),
        )
    )
    return store


def _search(store: InMemoryContactStore) -> ContactSearch:
    return ContactSearch(ContactorContext.open(store))


def test_shallow_matches_name_prefixes() -> None:
    found = _search(_store()).find("Lee")
    assert [e.given_name for e in found] == ["Ann", "Bob"]


def test_shallow_is_case_insensitive_and_multi_word() -> None:
    search = _search(_store())
    assert [e.given_name for e in search.find("ann lee")] == ["Ann"]
    assert search.find("ANN") == search.find("ann")


def test_shallow_falls_back_to_identifier() -> None:
    store = _store()
    carol_id = store.find_by_name("Carol")[0].identifier
    found = _search(store).find(carol_id)
    assert [e.identifier for e in found] == [carol_id]


def test_wildcard_returns_everything_in_store_order() -> None:
    found = _search(_store()).find("*")
    assert [e.given_name for e in found] == ["Ann", "Bob", "Carol"]


def test_deep_scans_every_field() -> None:
    search = _search(_store())
    assert search.find("jazz") == []
    assert [e.given_name for e in search.find("jazz", deep=True)] == ["Bob"]
    assert [e.given_name for e in search.find("lee", deep=True)] == ["Ann", "Bob", "Carol"]


def test_deep_is_superset_of_shallow() -> None:
    search = _search(_store())
    for filter in ("Lee", "ann lee", "Carol", "jazz", "nobody"):
        shallow = {e.identifier for e in search.find(filter)}
        deep = {e.identifier for e in search.find(filter, deep=True)}
        assert shallow <= deep


def test_exists_counts_matches() -> None:
    search = _search(_store())
    assert search.exists("Lee") == 2
    assert search.exists("nobody") == 0
    assert search.exists("jazz", deep=True) == 1


def test_store_failure_is_empty_result() -> None:
    store = BrokenStore()
    store.save(ContactEntity(given_name="Ann"))
    search = _search(store)
    assert search.find("Ann") == []
    assert search.find("Ann", deep=True) == []
    assert search.exists("Ann") == 0

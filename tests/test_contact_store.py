"""Unit tests for ContactStore: refresh, lookup, and local search. In-memory API only."""

import asyncio

import pytest

from contactbook.application import ContactStore, FetchFailed, Refreshed, search_contacts
from contactbook.application.errors import ServiceError
from contactbook.domain import Contact
from contactbook.infrastructure import InMemoryContactsApi

ANN = Contact(id="1", first_name="Ann", last_name="Lee", email="ann@x.com")
BO = Contact(id="2", first_name="Bo", last_name="Ann", email="bo@y.com")


def _api(contacts: list[Contact]) -> InMemoryContactsApi:
    api = InMemoryContactsApi()
    credential = api.directory.register("Owner", "owner@example.com", "secret")
    api.set_token(credential.token)
    api.directory.seed(credential.token, contacts)
    return api


async def _store(contacts: list[Contact]) -> ContactStore:
    store = ContactStore(_api(contacts))
    result = await store.refresh()
    assert isinstance(result, Refreshed)
    return store


class _GatedApi:
    """list_contacts returns (or raises) the queued responses only when each gate is released."""

    def __init__(self) -> None:
        self.gates: list[tuple[asyncio.Event, list[Contact] | ServiceError]] = []

    def queue(self, contacts: list[Contact] | ServiceError) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates.append((gate, contacts))
        return gate

    async def list_contacts(self) -> list[Contact]:
        gate, contacts = self.gates.pop(0)
        await gate.wait()
        if isinstance(contacts, ServiceError):
            raise contacts
        return contacts


@pytest.mark.asyncio
async def test_search_ann_matches_first_and_last_name_in_snapshot_order() -> None:
    store = await _store([ANN, BO])

    results = store.search("ann")

    assert [c.id for c in results] == ["1", "2"]


@pytest.mark.asyncio
async def test_empty_or_blank_query_returns_full_snapshot() -> None:
    store = await _store([ANN, BO])

    assert store.search("") == list(store.snapshot)
    assert store.search("   ") == list(store.snapshot)
    assert store.search(None) == list(store.snapshot)


@pytest.mark.asyncio
async def test_search_is_case_insensitive_on_names_email_and_company() -> None:
    carol = Contact(id="3", first_name="Carol", last_name="Diaz", company="Initech")
    store = await _store([ANN, BO, carol])

    assert [c.id for c in store.search("LEE")] == ["1"]
    assert [c.id for c in store.search("Y.COM")] == ["2"]
    assert [c.id for c in store.search("initech")] == ["3"]
    assert store.search("nobody") == []


def test_phone_matches_verbatim_against_lowercased_query() -> None:
    cy = Contact(id="5", first_name="Cy", last_name="Dee", phone="555 EXT 2")
    di = Contact(id="6", first_name="Di", last_name="Eve", phone="+1 (555) 0100")

    assert [c.id for c in search_contacts([cy, di], "555")] == ["5", "6"]
    assert [c.id for c in search_contacts([cy, di], "(555)")] == ["6"]
    # "EXT" is lower-cased to "ext", which the phone does not contain.
    assert search_contacts([cy, di], "EXT") == []


def test_absent_optional_fields_never_match() -> None:
    bare = Contact(id="7", first_name="Zed", last_name="Yu")

    assert search_contacts([bare], "none") == []
    assert search_contacts([bare], "@") == []


def test_notes_are_not_searched() -> None:
    noted = Contact(id="8", first_name="Al", last_name="Bo", notes="met at PyCon")

    assert search_contacts([noted], "pycon") == []


def test_search_results_are_ordered_subset_and_exclusions_do_not_match() -> None:
    contacts = [
        ANN,
        BO,
        Contact(id="3", first_name="Carol", last_name="Lee", company="Annex"),
        Contact(id="4", first_name="Dan", last_name="Ray", phone="0123"),
    ]
    for query in ("ann", "lee", "a", "01", "x.com", "zzz"):
        results = search_contacts(contacts, query)
        ids = [c.id for c in results]
        assert ids == [c.id for c in contacts if c in results]
        for c in contacts:
            searchable = [c.first_name, c.last_name, c.email or "", c.company or ""]
            matches = any(query.lower() in s.lower() for s in searchable) or (
                query.lower() in (c.phone or "")
            )
            assert (c in results) == matches


@pytest.mark.asyncio
async def test_search_does_not_mutate_snapshot() -> None:
    store = await _store([ANN, BO])
    before = store.snapshot

    store.search("bo")
    store.search("")

    assert store.snapshot == before


@pytest.mark.asyncio
async def test_refresh_replaces_snapshot_in_service_order() -> None:
    api = _api([BO, ANN])
    store = ContactStore(api)

    result = await store.refresh()

    assert result == Refreshed(count=2)
    assert [c.id for c in store.snapshot] == ["2", "1"]


@pytest.mark.asyncio
async def test_refresh_failure_keeps_previous_snapshot() -> None:
    api = _api([ANN, BO])
    store = ContactStore(api)
    await store.refresh()
    before = store.snapshot

    api.fail_next("list_contacts", "Database unavailable")
    result = await store.refresh()

    assert result == FetchFailed(message="Database unavailable")
    assert store.snapshot == before


@pytest.mark.asyncio
async def test_refresh_with_duplicate_ids_is_a_failure() -> None:
    class DuplicatingApi:
        async def list_contacts(self):
            return [ANN, Contact(id="1", first_name="Other", last_name="Ann")]

    store = ContactStore(DuplicatingApi())

    result = await store.refresh()

    assert isinstance(result, FetchFailed)
    assert "Duplicate contact id" in result.message
    assert store.snapshot == ()


@pytest.mark.asyncio
async def test_refresh_failure_uses_generic_message_when_service_sent_none() -> None:
    class FailingApi:
        async def list_contacts(self):
            raise ServiceError(None, 500)

    store = ContactStore(FailingApi())

    assert await store.refresh() == FetchFailed(message="Something went wrong")


@pytest.mark.asyncio
async def test_later_issued_refresh_wins_over_slower_earlier_one() -> None:
    api = _GatedApi()
    store = ContactStore(api)
    first_gate = api.queue([ANN])
    second_gate = api.queue([ANN, BO])

    first = asyncio.create_task(store.refresh())
    second = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    second_gate.set()
    second_result = await second
    first_gate.set()
    first_result = await first

    assert second_result == Refreshed(count=2)
    assert first_result == Refreshed(count=1, applied=False)
    assert [c.id for c in store.snapshot] == ["1", "2"]


@pytest.mark.asyncio
async def test_clear_empties_snapshot_and_drops_in_flight_refresh() -> None:
    api = _GatedApi()
    store = ContactStore(api)
    gate = api.queue([ANN, BO])

    pending = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    store.clear()
    gate.set()
    result = await pending

    assert result.applied is False
    assert store.snapshot == ()


@pytest.mark.asyncio
async def test_superseded_refresh_failure_is_dropped() -> None:
    api = _GatedApi()
    store = ContactStore(api)
    first_gate = api.queue(ServiceError("Timeout"))
    second_gate = api.queue([ANN])

    first = asyncio.create_task(store.refresh())
    second = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    second_gate.set()
    assert await second == Refreshed(count=1)
    first_gate.set()

    assert await first == Refreshed(count=1, applied=False)
    assert [c.id for c in store.snapshot] == ["1"]


@pytest.mark.asyncio
async def test_refresh_failing_after_clear_is_dropped() -> None:
    api = _GatedApi()
    store = ContactStore(api)
    gate = api.queue(ServiceError("Timeout"))

    pending = asyncio.create_task(store.refresh())
    await asyncio.sleep(0)
    store.clear()
    gate.set()

    assert await pending == Refreshed(count=0, applied=False)


@pytest.mark.asyncio
async def test_find_by_id() -> None:
    store = await _store([ANN, BO])

    assert store.find_by_id("2") == BO
    assert store.find_by_id("missing") is None

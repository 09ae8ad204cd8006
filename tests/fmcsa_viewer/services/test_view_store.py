from __future__ import annotations

from itertools import count

from fmcsa_viewer.core.filter_state import FilterState, PageState, SortState
from fmcsa_viewer.core.records import Record
from fmcsa_viewer.core.snapshot import ViewSnapshot
from fmcsa_viewer.core.working_state import (
    WorkingState,
    apply_snapshot,
    materialize,
    request_sort,
    run_pipeline,
    set_global_filter,
    to_snapshot,
)
from fmcsa_viewer.services.storage import DictKeyValueStore
from fmcsa_viewer.services.view_store import (
    ViewStore,
    generate_share_id,
    parse_view_param,
    to_base36,
)


def _store(**kwargs) -> ViewStore:
    ticks = count(1_700_000_000_000)
    return ViewStore(DictKeyValueStore(), clock=lambda: next(ticks) / 1000, **kwargs)


def _snapshot() -> ViewSnapshot:
    return ViewSnapshot(
        filters=FilterState(global_text="acme", per_column={"phone": "214"}),
        sort=SortState(key="legal_name", direction="desc"),
        page=PageState(index=1, size=5),
    )


def test_save_then_load_roundtrip():
    store = _store()
    result = store.save("X", _snapshot())
    assert result.ok
    assert result.message == "View 'X' saved."

    loaded = store.load("X")
    assert loaded.ok
    assert loaded.snapshot == _snapshot()
    assert store.list() == ["X"]


def test_save_drops_materialized_data_for_named_views():
    store = _store()
    store.save("X", _snapshot().with_data([Record(legal_name="Acme")]))
    assert store.load("X").snapshot.data is None


def test_save_overwrites_existing_name():
    store = _store()
    store.save("X", _snapshot())
    store.save("X", ViewSnapshot.default())
    assert store.load("X").snapshot == ViewSnapshot.default()
    assert store.list() == ["X"]


def test_save_with_empty_name_is_refused():
    store = _store()
    for name in ("", "   ", None):
        result = store.save(name, _snapshot())
        assert not result.ok
        assert result.message == "Please enter a name to save the view."
    assert store.storage.keys() == []


def test_delete_then_load_is_not_found_and_delete_is_idempotent():
    store = _store()
    store.save("X", _snapshot())

    assert store.delete("X").ok
    result = store.load("X")
    assert not result.ok
    assert result.snapshot is None
    assert result.message == "No saved view found with the name 'X'."
    assert store.list() == []

    assert store.delete("X").ok


def test_malformed_stored_value_is_not_found():
    store = _store()
    store.storage.set_item("saved_view:broken", "{not json")
    store.storage.set_item("saved_view:wrong", '{"rowsPerPage": 7}')
    assert not store.load("broken").ok
    assert not store.load("wrong").ok


def test_namespaced_list_ignores_foreign_and_share_keys():
    store = _store()
    store.storage.set_item("theme", "dark")
    store.save("mine", _snapshot())
    store.generate_share_link(_snapshot(), "http://localhost:8050/")
    assert store.list() == ["mine"]


def test_flat_mode_lists_every_key():
    store = _store(namespaced=False)
    store.storage.set_item("theme", "dark")
    store.save("mine", _snapshot())
    link = store.generate_share_link(_snapshot(), "http://localhost:8050/")

    assert store.storage.get_item("mine") is not None
    assert set(store.list()) == {"theme", "mine", f"view_{parse_view_param(link.split('?')[1])}"}
    assert store.load("mine").ok


def test_share_link_replaces_query_and_reproduces_rows():
    live = [Record(legal_name=n, entity_type=t) for n, t in [
        ("Acme", "CARRIER"), ("Blue", "BROKER"), ("Crossroads", "CARRIER"), ("Delta", "CARRIER"),
    ]]
    state = request_sort(set_global_filter(WorkingState(), "carrier"), "legal_name")
    state = request_sort(state, "legal_name")  # descending
    captured = materialize(state, live)

    store = _store()
    link = store.generate_share_link(to_snapshot(state, data=captured), "http://host/app?view=old&x=1#frag")
    assert link.startswith("http://host/app?view=")
    assert "x=1" not in link and "#" not in link

    # the live dataset changes after the link was made
    live.append(Record(legal_name="Zulu", entity_type="CARRIER"))

    snapshot = store.resolve_share_link("?" + link.split("?", 1)[1])
    assert snapshot is not None
    restored = apply_snapshot(WorkingState(), snapshot)
    assert materialize(restored, live) == captured
    assert [r["legal_name"] for r in run_pipeline(restored, live).rows] == ["Delta", "Crossroads", "Acme"]


def test_resolve_share_link_without_param_or_unknown_id():
    store = _store()
    assert store.resolve_share_link("") is None
    assert store.resolve_share_link(None) is None
    assert store.resolve_share_link("?other=1") is None
    assert store.resolve_share_link("?view=nope") is None


def test_reset_returns_default_snapshot():
    result = _store().reset(page_size=25)
    assert result.ok
    assert result.message == "View reset to default."
    assert result.snapshot == ViewSnapshot(page=PageState(size=25))


def test_share_id_is_base36_of_epoch_millis():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    assert generate_share_id(lambda: 1.0) == to_base36(1000)


def test_parse_view_param():
    assert parse_view_param("?view=abc") == "abc"
    assert parse_view_param("view=abc&x=1") == "abc"
    assert parse_view_param("?view=") is None


def test_names_are_stripped_on_save_load_and_delete():
    store = _store()
    assert store.save(" X ", _snapshot()).message == "View 'X' saved."
    assert store.list() == ["X"]

    loaded = store.load(" X ")
    assert loaded.ok
    assert loaded.message == "View 'X' loaded."
    assert loaded.snapshot == _snapshot()

    store.delete(" X ")
    assert store.list() == []
    assert not store.load("X").ok


def test_deeply_nested_stored_value_is_not_found():
    store = _store()
    store.storage.set_item("saved_view:deep", "[" * 100_000 + "]" * 100_000)
    store.storage.set_item("view_deep", '{"filteredData": ' + "[" * 100_000 + "]" * 100_000 + "}")

    result = store.load("deep")
    assert not result.ok
    assert result.message == "No saved view found with the name 'deep'."
    assert store.resolve_share_link("?view=deep") is None

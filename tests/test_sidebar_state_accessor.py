from hims_gui.services.local_storage import LocalStorage
from hims_gui.services.preference_accessor import ConsumerPhase
from hims_gui.services.sidebar_state import (
    SIDEBAR_STATE_KEY,
    SidebarStateAccessor,
    create_sidebar_store,
)


def _storage_with(tmp_path, raw):
    storage = LocalStorage(tmp_path)
    storage.set_item(SIDEBAR_STATE_KEY, raw)
    return storage


def test_store_defaults_to_expanded():
    store = create_sidebar_store(None)
    assert store.get_value() is True
    assert store.persistence.key == "hims_sidebar_expanded"


def test_uninitialized_reports_placeholder_regardless_of_store():
    store = create_sidebar_store(None)
    accessor = SidebarStateAccessor(store)
    store.set_false()
    assert accessor.phase is ConsumerPhase.UNINITIALIZED
    assert accessor.is_expanded is True
    assert store.observer_count == 0


def test_hydration_applies_stored_value(tmp_path):
    store = create_sidebar_store(_storage_with(tmp_path, "false"))
    accessor = SidebarStateAccessor(store)
    assert accessor.is_expanded is True
    accessor.mount()
    assert accessor.phase is ConsumerPhase.LIVE
    assert accessor.is_expanded is False
    assert store.get_value() is False


def test_mount_loads_exactly_once(tmp_path):
    store = create_sidebar_store(_storage_with(tmp_path, "false"))
    calls = []
    original_load = store.persistence.load

    def counting_load():
        calls.append(1)
        return original_load()

    store.persistence.load = counting_load
    accessor = SidebarStateAccessor(store)
    accessor.mount()
    accessor.mount()
    assert len(calls) == 1
    assert store.observer_count == 1


def test_mount_notifies_consumer_once():
    renders = []
    accessor = SidebarStateAccessor(create_sidebar_store(None), on_change=lambda: renders.append(1))
    accessor.mount()
    assert renders == [1]


def test_missing_storage_does_not_clobber_live_value():
    store = create_sidebar_store(None)
    first = SidebarStateAccessor(store)
    first.mount()
    first.collapse()
    second = SidebarStateAccessor(store)
    second.mount()
    assert second.is_expanded is False
    assert first.is_expanded is False


def test_live_consumer_tracks_store_changes():
    store = create_sidebar_store(None)
    renders = []
    accessor = SidebarStateAccessor(store, on_change=lambda: renders.append(accessor.is_expanded))
    accessor.mount()
    store.set_false()
    store.set_true()
    assert renders == [True, False, True]


def test_two_consumers_observe_toggle(tmp_path):
    store = create_sidebar_store(LocalStorage(tmp_path))
    header = SidebarStateAccessor(store)
    sidebar = SidebarStateAccessor(store)
    header.mount()
    sidebar.mount()
    header.toggle()
    assert header.is_expanded is False
    assert sidebar.is_expanded is False
    sidebar.expand()
    assert header.is_expanded is True
    header.collapse()
    assert sidebar.is_expanded is False
    assert LocalStorage(tmp_path).get_item(SIDEBAR_STATE_KEY) == "false"


def test_teardown_unsubscribes_exactly_once():
    store = create_sidebar_store(None)
    renders = []
    accessor = SidebarStateAccessor(store, on_change=lambda: renders.append(1))
    accessor.mount()
    assert store.observer_count == 1
    accessor.teardown()
    accessor.teardown()
    assert accessor.phase is ConsumerPhase.TORN_DOWN
    assert store.observer_count == 0
    store.set_false()
    assert renders == [1]
    assert accessor.is_expanded is True


def test_teardown_before_mount_prevents_mount():
    store = create_sidebar_store(None)
    accessor = SidebarStateAccessor(store)
    accessor.teardown()
    accessor.mount()
    assert accessor.phase is ConsumerPhase.TORN_DOWN
    assert store.observer_count == 0


def test_many_consumers_do_not_leak_subscriptions():
    store = create_sidebar_store(None)
    accessors = [SidebarStateAccessor(store) for _ in range(25)]
    for a in accessors:
        a.mount()
    assert store.observer_count == 25
    for a in accessors:
        a.teardown()
    assert store.observer_count == 0


def test_operations_before_mount_reach_store():
    store = create_sidebar_store(None)
    accessor = SidebarStateAccessor(store)
    accessor.toggle()
    assert store.get_value() is False
    assert accessor.is_expanded is True
    accessor.mount()
    assert accessor.is_expanded is False


def test_corrupt_stored_value_hydrates_to_default(tmp_path):
    store = create_sidebar_store(_storage_with(tmp_path, "not-json"))
    accessor = SidebarStateAccessor(store)
    accessor.mount()
    assert accessor.is_expanded is True


def test_deeply_nested_stored_value_hydrates_to_default(tmp_path):
    store = create_sidebar_store(_storage_with(tmp_path, "[" * 200000))
    accessor = SidebarStateAccessor(store)
    accessor.mount()
    assert accessor.phase is ConsumerPhase.LIVE
    assert accessor.is_expanded is True
    assert store.persistence.failure_count == 1

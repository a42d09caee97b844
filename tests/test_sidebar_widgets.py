import sys

import pytest

QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from hims_gui.components.sidebar import (  # noqa: E402
    COLLAPSED_WIDTH,
    EXPANDED_WIDTH,
    SidebarPanel,
    SidebarToggleButton,
)
from hims_gui.services.local_storage import LocalStorage  # noqa: E402
from hims_gui.services.navigation_history import (  # noqa: E402
    NavigationFavorites,
    RecentNavigation,
    create_recent_store,
    create_favorites_store,
)
from hims_gui.services.preference_accessor import ConsumerPhase  # noqa: E402
from hims_gui.services.sidebar_state import SIDEBAR_STATE_KEY, create_sidebar_store  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def _qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    yield app


def _process():
    QtWidgets.QApplication.processEvents()


def _collapsed_storage(tmp_path):
    storage = LocalStorage(tmp_path)
    storage.set_item(SIDEBAR_STATE_KEY, "false")
    return storage


def test_first_render_uses_placeholder_until_shown(tmp_path):
    store = create_sidebar_store(_collapsed_storage(tmp_path))
    panel = SidebarPanel(store)
    assert panel.accessor.phase is ConsumerPhase.UNINITIALIZED
    assert panel.minimumWidth() == EXPANDED_WIDTH
    assert panel.button_for("dashboard").text().endswith("Dashboard")

    panel.show()
    _process()
    assert panel.accessor.phase is ConsumerPhase.LIVE
    assert panel.is_expanded is False
    assert panel.minimumWidth() == COLLAPSED_WIDTH
    assert panel.button_for("dashboard").text() == "D"
    panel.close()


def test_toggle_button_and_sidebar_stay_in_sync(tmp_path):
    store = create_sidebar_store(LocalStorage(tmp_path))
    panel = SidebarPanel(store)
    button = SidebarToggleButton(store)
    panel.show()
    button.show()
    _process()
    assert button.text() == "<<"

    button.click()
    assert store.get_value() is False
    assert panel.is_expanded is False
    assert button.text() == ">>"
    assert LocalStorage(tmp_path).get_item(SIDEBAR_STATE_KEY) == "false"

    button.click()
    assert panel.is_expanded is True
    assert panel.minimumWidth() == EXPANDED_WIDTH
    panel.close()
    button.close()


def test_close_releases_subscription():
    store = create_sidebar_store(None)
    panel = SidebarPanel(store)
    panel.show()
    _process()
    assert store.observer_count == 1
    panel.close()
    assert store.observer_count == 0
    assert panel.accessor.phase is ConsumerPhase.TORN_DOWN


def test_close_before_mount_never_subscribes():
    store = create_sidebar_store(None)
    panel = SidebarPanel(store)
    panel.show()
    panel.close()
    _process()
    assert store.observer_count == 0


def test_item_activation_signal():
    panel = SidebarPanel(create_sidebar_store(None))
    activated = []
    panel.itemActivated.connect(activated.append)
    panel.button_for("laboratory").click()
    assert activated == ["laboratory"]
    panel.dispose()


def test_main_window_records_recent_navigation(tmp_path):
    from hims_gui.main_window import MainWindow

    storage = LocalStorage(tmp_path)
    recent = RecentNavigation(create_recent_store(storage))
    store = create_sidebar_store(storage)
    win = MainWindow(store, recent)
    win.show()
    _process()
    win.sidebar.button_for("patients").click()
    assert win.content.text() == "patients"
    assert recent.items() == ["patients"]

    win.sidebar_toggle.click()
    assert win.sidebar.is_expanded is False
    win.close()
    assert store.observer_count == 0


def test_sidebar_marks_favorites_and_follows_changes(tmp_path):
    storage = LocalStorage(tmp_path)
    storage.set_item("hims_favorites", '["patients"]')
    favorites = NavigationFavorites(create_favorites_store(storage))
    panel = SidebarPanel(create_sidebar_store(storage), favorites=favorites)
    assert panel.favorite_ids() == []
    assert not panel.button_for("patients").text().endswith("*")

    panel.show()
    _process()
    assert panel.favorite_ids() == ["patients"]
    assert panel.button_for("patients").text().endswith("*")

    favorites.toggle_favorite("radiology")
    assert panel.button_for("radiology").text().endswith("*")
    panel.close()
    assert favorites.store.observer_count == 0


def test_main_window_toggles_favorite_for_current_item(tmp_path):
    from hims_gui.main_window import MainWindow

    storage = LocalStorage(tmp_path)
    favorites = NavigationFavorites(create_favorites_store(storage))
    win = MainWindow(create_sidebar_store(storage), favorites=favorites)
    win.show()
    _process()
    assert win.favorite_button.isEnabled() is False

    win.sidebar.button_for("laboratory").click()
    win.favorite_button.click()
    assert favorites.is_favorite("laboratory")
    assert win.sidebar.button_for("laboratory").text().endswith("*")
    assert LocalStorage(tmp_path).get_item("hims_favorites") == '["laboratory"]'

    win.favorite_button.click()
    assert favorites.items() == []
    win.close()
    assert favorites.store.observer_count == 0

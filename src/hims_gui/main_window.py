"""Main window: header with sidebar toggle, navigation sidebar, content area."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from hims_config import settings
from hims_gui.components.sidebar import SidebarPanel, SidebarToggleButton
from hims_gui.services.navigation_history import NavigationFavorites, RecentNavigation
from hims_gui.services.preference_store import BooleanPreferenceStore

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(
        self,
        sidebar_store: BooleanPreferenceStore,
        recent: RecentNavigation | None = None,
        favorites: NavigationFavorites | None = None,
    ):
        super().__init__()
        self.setWindowTitle(settings.APP_NAME)
        self._recent = recent
        self._favorites = favorites
        self._current_item: str | None = None

        root = QWidget(self)
        outer = QVBoxLayout(root)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        header = QWidget(root)
        header.setObjectName("AppHeader")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(8, 4, 8, 4)
        self.sidebar_toggle = SidebarToggleButton(sidebar_store, header)
        header_layout.addWidget(self.sidebar_toggle)
        header_layout.addWidget(QLabel(settings.APP_NAME, header))
        header_layout.addStretch(1)
        self.favorite_button = QToolButton(header)
        self.favorite_button.setObjectName("FavoriteButton")
        self.favorite_button.setText("Favorite")
        self.favorite_button.setEnabled(False)
        self.favorite_button.setVisible(favorites is not None)
        self.favorite_button.clicked.connect(self._toggle_current_favorite)
        header_layout.addWidget(self.favorite_button)
        outer.addWidget(header)

        body = QWidget(root)
        body_layout = QHBoxLayout(body)
        body_layout.setContentsMargins(0, 0, 0, 0)
        self.sidebar = SidebarPanel(sidebar_store, parent=body, favorites=favorites)
        self.sidebar.itemActivated.connect(self._on_item_activated)
        body_layout.addWidget(self.sidebar)
        self.content = QLabel("Select a module", body)
        self.content.setObjectName("ContentArea")
        body_layout.addWidget(self.content, 1)
        outer.addWidget(body, 1)

        self.setCentralWidget(root)

    def _on_item_activated(self, item_id: str) -> None:
        self._current_item = item_id
        self.favorite_button.setEnabled(True)
        self.content.setText(item_id)
        if self._recent is not None:
            self._recent.add(item_id)
        logger.debug("Navigated to %s", item_id)

    def _toggle_current_favorite(self) -> None:
        if self._favorites is None or self._current_item is None:
            return
        self._favorites.toggle_favorite(self._current_item)

    def closeEvent(self, event):  # noqa: N802 - Qt override
        self.sidebar.dispose()
        self.sidebar_toggle.dispose()
        super().closeEvent(event)

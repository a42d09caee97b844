"""Navigation sidebar and its header toggle button.

Both widgets read the shared sidebar store through their own
`SidebarStateAccessor`:
 - Construction renders the fixed placeholder (expanded), never the stored
   value, so the first frame is identical on every launch.
 - `showEvent` schedules `accessor.mount()` on the next event-loop turn;
   mounting hydrates from storage and subscribes.
 - `closeEvent`, `dispose()` and QObject destruction tear the accessor down
   so no subscription outlives the widget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtWidgets import QFrame, QToolButton, QVBoxLayout, QWidget

from hims_gui.services.navigation_history import NavigationFavorites
from hims_gui.services.preference_accessor import ConsumerPhase, PreferenceAccessor
from hims_gui.services.preference_store import BooleanPreferenceStore
from hims_gui.services.sidebar_state import SidebarStateAccessor

__all__ = [
    "SidebarItem",
    "SidebarPanel",
    "SidebarToggleButton",
    "DEFAULT_SIDEBAR_ITEMS",
    "EXPANDED_WIDTH",
    "COLLAPSED_WIDTH",
]

EXPANDED_WIDTH = 240
COLLAPSED_WIDTH = 64


@dataclass(frozen=True)
class SidebarItem:
    item_id: str
    label: str
    glyph: str

    def text(self, expanded: bool) -> str:
        return f"{self.glyph}  {self.label}" if expanded else self.glyph


DEFAULT_SIDEBAR_ITEMS: Sequence[SidebarItem] = (
    SidebarItem("dashboard", "Dashboard", "D"),
    SidebarItem("patients", "Patients", "P"),
    SidebarItem("appointments", "Appointments", "A"),
    SidebarItem("laboratory", "Laboratory", "L"),
    SidebarItem("radiology", "Radiology", "R"),
    SidebarItem("ipd", "Inpatient", "I"),
    SidebarItem("reports", "Reports", "S"),
)


class _AccessorMixin:
    """Lifecycle glue shared by the sidebar widgets."""

    accessor: SidebarStateAccessor

    def _bind_accessor(self, store: BooleanPreferenceStore) -> None:
        self.accessor = SidebarStateAccessor(store, on_change=self._render)
        accessor = self.accessor
        # destroyed fires after the Python wrapper may be gone; capture accessor only
        self.destroyed.connect(lambda *_: accessor.teardown())  # type: ignore[attr-defined]

    def _schedule_mount(self) -> None:
        if self.accessor.phase is ConsumerPhase.UNINITIALIZED:
            QTimer.singleShot(0, self.accessor.mount)

    def dispose(self) -> None:
        self.accessor.teardown()

    def _render(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError


class SidebarPanel(QFrame, _AccessorMixin):
    """Collapsible navigation panel.

    Signals:
        itemActivated(str): emitted with the item id when an entry is clicked.
    """

    itemActivated = pyqtSignal(str)

    def __init__(
        self,
        store: BooleanPreferenceStore,
        items: Optional[Iterable[SidebarItem]] = None,
        parent: QWidget | None = None,
        favorites: NavigationFavorites | None = None,
    ):
        super().__init__(parent)
        self.setObjectName("SidebarPanel")
        self.favorites_accessor: Optional[PreferenceAccessor[List[str]]] = None
        if favorites is not None:
            fav_accessor = PreferenceAccessor(
                favorites.store,
                favorites.store.persistence,
                placeholder=[],
                on_change=self._render,
            )
            self.favorites_accessor = fav_accessor
            self.destroyed.connect(lambda *_: fav_accessor.teardown())
        self._items: List[SidebarItem] = list(items if items is not None else DEFAULT_SIDEBAR_ITEMS)
        self._buttons: dict[str, QToolButton] = {}
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 8, 4, 8)
        layout.setSpacing(2)
        for item in self._items:
            btn = QToolButton(self)
            btn.setObjectName(f"SidebarItem_{item.item_id}")
            btn.setToolTip(item.label)
            btn.setAutoRaise(True)
            btn.clicked.connect(lambda _checked=False, i=item.item_id: self.itemActivated.emit(i))
            layout.addWidget(btn)
            self._buttons[item.item_id] = btn
        layout.addStretch(1)
        self._bind_accessor(store)
        self._render()

    @property
    def is_expanded(self) -> bool:
        return self.accessor.is_expanded

    def button_for(self, item_id: str) -> QToolButton:
        return self._buttons[item_id]

    def favorite_ids(self) -> List[str]:
        if self.favorites_accessor is None:
            return []
        return list(self.favorites_accessor.value)

    def _render(self) -> None:
        expanded = self.accessor.is_expanded
        favorites = set(self.favorite_ids())
        self.setFixedWidth(EXPANDED_WIDTH if expanded else COLLAPSED_WIDTH)
        for item in self._items:
            text = item.text(expanded)
            if expanded and item.item_id in favorites:
                text += " *"
            self._buttons[item.item_id].setText(text)
        self.setProperty("expanded", expanded)

    def showEvent(self, event):  # noqa: N802 - Qt override
        super().showEvent(event)
        self._schedule_mount()

    def _schedule_mount(self) -> None:
        super()._schedule_mount()
        fav = self.favorites_accessor
        if fav is not None and fav.phase is ConsumerPhase.UNINITIALIZED:
            QTimer.singleShot(0, fav.mount)

    def dispose(self) -> None:
        super().dispose()
        if self.favorites_accessor is not None:
            self.favorites_accessor.teardown()

    def closeEvent(self, event):  # noqa: N802 - Qt override
        self.dispose()
        super().closeEvent(event)


class SidebarToggleButton(QToolButton, _AccessorMixin):
    """Header button that expands/collapses the sidebar."""

    def __init__(self, store: BooleanPreferenceStore, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("SidebarToggleButton")
        self.clicked.connect(lambda _checked=False: self.accessor.toggle())
        self._bind_accessor(store)
        self._render()

    def _render(self) -> None:
        expanded = self.accessor.is_expanded
        self.setText("<<" if expanded else ">>")
        self.setToolTip("Collapse sidebar" if expanded else "Expand sidebar")

    def showEvent(self, event):  # noqa: N802 - Qt override
        super().showEvent(event)
        self._schedule_mount()

    def closeEvent(self, event):  # noqa: N802 - Qt override
        self.dispose()
        super().closeEvent(event)

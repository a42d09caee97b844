"""Launcher for `python -m hims_gui` or external callers."""

from __future__ import annotations

import sys

from hims_config import settings
from hims_gui.app.bootstrap import create_app
from hims_gui.services.navigation_history import NavigationFavorites, RecentNavigation
from hims_gui.services.service_locator import NAVIGATION_FAVORITES, RECENT_NAVIGATION


def main() -> int:  # pragma: no cover - runtime
    ctx = create_app(headless=False, data_dir=settings.DATA_DIR)
    from hims_gui.main_window import MainWindow

    app = ctx.qt_app
    if app is None:
        print("PyQt6 is required to run the HIMS shell.", file=sys.stderr)  # noqa: T201
        return 1
    recent = ctx.services.get_typed(RECENT_NAVIGATION, RecentNavigation)
    favorites = ctx.services.get_typed(NAVIGATION_FAVORITES, NavigationFavorites)
    win = MainWindow(ctx.sidebar_store, recent, favorites)
    win.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

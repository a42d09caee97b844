# Shared test setup: headless Qt platform and a clean global service locator
# (with the log capture handler detached) after every test.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from hims_gui.services.service_locator import LOGGING_SERVICE, services  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_services():
    yield
    logging_service = services.try_get(LOGGING_SERVICE)
    if logging_service is not None:
        logging_service.detach_root()
    services.clear()

from hims_config import settings
from hims_config.settings import env_flag


def test_env_flag_truthy_values(monkeypatch):
    for raw in ("1", "true", "YES", " on "):
        monkeypatch.setenv("HIMS_TEST_FLAG", raw)
        assert env_flag("HIMS_TEST_FLAG") is True


def test_env_flag_falsy_and_missing(monkeypatch):
    monkeypatch.setenv("HIMS_TEST_FLAG", "0")
    assert env_flag("HIMS_TEST_FLAG", default=True) is False
    monkeypatch.delenv("HIMS_TEST_FLAG", raising=False)
    assert env_flag("HIMS_TEST_FLAG") is False
    assert env_flag("HIMS_TEST_FLAG", default=True) is True


def test_defaults():
    assert settings.STORAGE_FILENAME == "local_storage.json"
    assert settings.DEFAULT_LOCALE in settings.SUPPORTED_LOCALES
    assert settings.MAX_RECENT_ITEMS == 10

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from api.main import create_app
from db.errors import ConfigurationError
from fakes import TEST_SETTINGS, StubDbClient


def test_root_lists_endpoints() -> None:
    client = TestClient(create_app(TEST_SETTINGS, db_client=StubDbClient()))

    body = client.get("/").json()

    assert body["health"] == "/api/health"
    assert "/api/trips/1.5" in body["endpoints"]


def test_method_not_allowed_keeps_error_shape() -> None:
    client = TestClient(create_app(TEST_SETTINGS, db_client=StubDbClient()))

    resp = client.post("/api/trips/1.1")

    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


def test_startup_fails_without_database_settings() -> None:
    app = create_app(Settings(mongo_uri=None, db_name=None), db_client=StubDbClient())

    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_startup_succeeds_with_settings() -> None:
    app = create_app(TEST_SETTINGS, db_client=StubDbClient(reply={"ok": 1.0}))

    with TestClient(app) as client:
        assert client.get("/api/health").status_code == 200


def test_main_serves_the_module_app(monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    from api import main as main_module

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(
        main_module.Settings,
        "from_env",
        classmethod(lambda cls: cls(mongo_uri="mongodb://db", db_name="citibike", port=3000, _env_file=None)),
    )

    main_module.main()

    assert calls == [("api.main:app", {"host": "0.0.0.0", "port": 3000})]


def test_main_exits_without_port(monkeypatch: pytest.MonkeyPatch) -> None:
    from api import main as main_module

    monkeypatch.setattr(
        main_module.Settings,
        "from_env",
        classmethod(lambda cls: cls(mongo_uri="mongodb://db", db_name="citibike", port=None, _env_file=None)),
    )

    with pytest.raises(SystemExit):
        main_module.main()

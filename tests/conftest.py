from __future__ import annotations

from pathlib import Path

import pytest

from gamesocio.data.db import init_db, reset_db
from gamesocio.models import CurrentUser
from gamesocio.services.object_storage import LocalObjectStorage, reset_object_storage
from gamesocio.services.profiles import create_profile

TEST_PUBLIC_URL = "http://testserver/storage"


@pytest.fixture
def api_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Use a temporary SQLite DB and storage directory."""
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    storage_root = tmp_path / "storage"
    monkeypatch.setenv("GAMESOCIO_STORAGE_DIR", storage_root.as_posix())
    monkeypatch.setenv("GAMESOCIO_PUBLIC_URL", TEST_PUBLIC_URL)
    reset_db()
    reset_object_storage()
    init_db()
    yield
    # Dispose engine to release connections
    reset_db()
    reset_object_storage()


@pytest.fixture
def storage(tmp_path: Path) -> LocalObjectStorage:
    """An object store rooted in a temporary directory."""
    return LocalObjectStorage(tmp_path / "objects", TEST_PUBLIC_URL)


@pytest.fixture
def alice(api_db) -> CurrentUser:
    create_profile("user-alice", "alice")
    return CurrentUser(id="user-alice", username="alice")


@pytest.fixture
def bob(api_db) -> CurrentUser:
    create_profile("user-bob", "bob")
    return CurrentUser(id="user-bob", username="bob")


@pytest.fixture(autouse=True)
def _api_db_for_api_tests(request: pytest.FixtureRequest) -> None:
    """Automatically apply the api_db fixture to tests in API test files."""
    test_file_path = Path(str(request.node.fspath))
    if "api" in test_file_path.stem.lower():
        request.getfixturevalue("api_db")

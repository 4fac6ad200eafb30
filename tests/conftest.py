from pathlib import Path
from unittest.mock import MagicMock

import pytest

from canister_deploy.core.conf import Settings

CANISTER_ID = "ryjl3-tyaaa-aaaaa-aaaba-cai"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        IC_ENV="local",
        NODE_ENV="development",
        WASM_PATH=str(tmp_path / "assetstorage.wasm"),
        BUILD_DIR=str(tmp_path / "dist"),
    )


@pytest.fixture()
def build_root(tmp_path: Path) -> Path:
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_bytes(b"<html/>\n\n\n")
    (root / "assets" / "logo.png").write_bytes(b"\x89PNG" + b"\x00" * 16)
    return root


@pytest.fixture()
def management():
    management = MagicMock()
    management.provisional_create_canister_with_cycles.return_value = CANISTER_ID
    management.fetch_canister_logs.return_value = []
    return management


@pytest.fixture()
def actor():
    return MagicMock()


@pytest.fixture()
def canister_id() -> str:
    return CANISTER_ID

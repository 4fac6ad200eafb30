from unittest.mock import MagicMock

import pytest

from canister_deploy.core import deployment
from canister_deploy.core.deployment import deploy_frontend
from canister_deploy.core.model import StageName, StagePolicy, StageStatus


@pytest.fixture()
def actor(monkeypatch):
    actor = MagicMock()
    monkeypatch.setattr(deployment, "AssetCanister", MagicMock(return_value=actor))
    return actor


@pytest.fixture(autouse=True)
def patched_management(monkeypatch, management):
    monkeypatch.setattr(
        deployment, "ManagementCanister", MagicMock(return_value=management)
    )
    return management


@pytest.fixture()
def wasm(settings):
    with open(settings.WASM_PATH, "wb") as fd:
        fd.write(b"\x00asm\x01\x00\x00\x00")
    return settings.WASM_PATH


def test_deploy_runs_every_stage(settings, build_root, wasm, management, actor, canister_id):
    result = deploy_frontend(MagicMock(), settings)

    assert result.canister_id == canister_id
    assert [s.stage for s in result.stages] == [
        StageName.PROVISION,
        StageName.STATUS,
        StageName.LOGS,
        StageName.INSTALL,
        StageName.UPLOAD,
    ]
    assert result.succeeded
    management.provisional_create_canister_with_cycles.assert_called_once_with(
        1_000_000_000_000
    )
    assert actor.store.call_count == 2
    assert result.urls == [
        f"http://{canister_id}.localhost:4943/",
        f"http://127.0.0.1:4943/?canisterId={canister_id}",
    ]


def test_empty_wasm_still_uploads_assets(settings, build_root, management, actor):
    open(settings.WASM_PATH, "wb").close()

    result = deploy_frontend(MagicMock(), settings)

    assert result.stage(StageName.INSTALL).status == StageStatus.FAILED
    management.install_code.assert_not_called()
    assert result.stage(StageName.UPLOAD).ok
    assert actor.store.call_count == 2
    assert result.failed_stages == [StageName.INSTALL]
    assert not result.succeeded


def test_install_failure_can_abort_upload(settings, build_root, management, actor):
    settings.INSTALL_FAILURE_POLICY = StagePolicy.ABORT

    result = deploy_frontend(MagicMock(), settings)

    assert result.stage(StageName.UPLOAD).status == StageStatus.SKIPPED
    actor.store.assert_not_called()


def test_provision_failure_stops_deployment(settings, management, actor):
    management.provisional_create_canister_with_cycles.side_effect = RuntimeError(
        "out of cycles"
    )

    result = deploy_frontend(MagicMock(), settings)

    assert result.canister_id is None
    assert [s.stage for s in result.stages] == [StageName.PROVISION]
    assert result.stages[0].error == "out of cycles"
    management.install_code.assert_not_called()
    actor.store.assert_not_called()


def test_report_failures_do_not_stop_deployment(
    settings, build_root, wasm, management, actor
):
    management.canister_status.side_effect = RuntimeError("status unavailable")
    management.fetch_canister_logs.side_effect = RuntimeError("logs unavailable")

    result = deploy_frontend(MagicMock(), settings)

    assert result.failed_stages == [StageName.STATUS, StageName.LOGS]
    management.install_code.assert_called_once()
    assert result.stage(StageName.UPLOAD).ok

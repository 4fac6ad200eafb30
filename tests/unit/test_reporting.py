from unittest.mock import MagicMock

from canister_deploy.core.deployment import fetch_logs, report_status
from canister_deploy.core.management import ManagementCanister
from canister_deploy.core.model import CanisterLogRecord, CanisterStatus, StageStatus


def test_report_status_without_canister_id(management):
    result = report_status(management, "")

    assert result.status == StageStatus.FAILED
    assert "not provided" in result.error
    management.canister_status.assert_not_called()


def test_report_status_swallows_remote_errors(management, canister_id):
    management.canister_status.side_effect = ConnectionError("connection refused")

    result = report_status(management, canister_id)

    assert result.status == StageStatus.FAILED
    assert "connection refused" in result.error


def test_report_status(management, canister_id):
    status = CanisterStatus(status="running", cycles=10, memory_size=1)
    management.canister_status.return_value = status

    result = report_status(management, canister_id)

    assert result.ok
    assert result.value == status
    management.canister_status.assert_called_once_with(canister_id)


def test_fetch_logs_without_canister_id(management):
    result = fetch_logs(management, None)

    assert result.status == StageStatus.FAILED
    management.fetch_canister_logs.assert_not_called()


def test_fetch_logs_swallows_remote_errors(management, canister_id):
    management.fetch_canister_logs.side_effect = RuntimeError("not a controller")

    result = fetch_logs(management, canister_id)

    assert result.status == StageStatus.FAILED
    assert result.error == "not a controller"


def test_fetch_logs(management, canister_id):
    records = [CanisterLogRecord(idx=0, timestamp_nanos=1, content="hello")]
    management.fetch_canister_logs.return_value = records

    result = fetch_logs(management, canister_id)

    assert result.ok
    assert result.value == records


def test_fetch_logs_reports_reject_message(canister_id):
    agent = MagicMock()
    agent.query_raw.return_value = "Caller is not allowed to read canister logs"

    result = fetch_logs(ManagementCanister(agent), canister_id)

    assert result.status == StageStatus.FAILED
    assert result.error == "Caller is not allowed to read canister logs"

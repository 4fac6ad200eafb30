import logging
from typing import Optional

from ic.principal import Principal

from ..exceptions import MissingCanisterIdError
from ..management import ManagementCanister
from ..model import StageName, StageResult

logger = logging.getLogger(__name__)


def _canister_principal(canister_id: Optional[str], action: str) -> str:
    if not canister_id:
        raise MissingCanisterIdError(
            f"Cannot {action}: canister id is not provided."
        )
    return Principal.from_str(canister_id).to_str()


def report_status(
    management: ManagementCanister, canister_id: Optional[str]
) -> StageResult:
    """
    Log the status of a canister. Errors are logged and returned, never raised.
    """
    try:
        canister = _canister_principal(canister_id, "fetch status")
        logger.info(f"Fetching status for canister: {canister}")
        status = management.canister_status(canister)
        logger.info(
            f"Canister {canister} is {status.status}, "
            f"cycles: {status.cycles}, memory: {status.memory_size}, "
            f"module hash: {status.module_hash}"
        )
        return StageResult.succeeded(StageName.STATUS, status)
    except Exception as e:
        logger.error(
            f"Error fetching status for canister {canister_id or 'unknown'}: {e}"
        )
        return StageResult.failed(StageName.STATUS, e)


def fetch_logs(
    management: ManagementCanister, canister_id: Optional[str]
) -> StageResult:
    """
    Log the records of a canister's log. Errors are logged and returned, never raised.
    """
    try:
        canister = _canister_principal(canister_id, "fetch logs")
        records = management.fetch_canister_logs(canister)
        logger.info(f"Logs for canister {canister}: {len(records)} records")
        for record in records:
            logger.info(f"  [{record.idx}] {record.timestamp_nanos}: {record.content}")
        return StageResult.succeeded(StageName.LOGS, records)
    except Exception as e:
        logger.error(
            f"Error fetching logs for canister {canister_id or 'unknown'}: {e}"
        )
        return StageResult.failed(StageName.LOGS, e)

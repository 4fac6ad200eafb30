import logging
from typing import Any, List

from ic.agent import Agent

from . import candid
from .constants import MANAGEMENT_CANISTER_ID
from .exceptions import CanisterRejectError
from .model import AssetRecord, CanisterLogRecord, CanisterStatus, InstallMode

logger = logging.getLogger(__name__)

CANISTER_STATUSES = ("running", "stopping", "stopped")


def _first_value(reply: Any) -> Any:
    # ic-py replies are lists of {"type": ..., "value": ...}, rejections the reject message
    if isinstance(reply, str):
        raise CanisterRejectError(reply)
    if isinstance(reply, list):
        if not reply:
            return None
        reply = reply[0]
    if isinstance(reply, dict) and "value" in reply:
        return reply["value"]
    return reply


def _unwrap_opt(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


class ManagementCanister:
    """
    Calls to the IC management canister (`aaaaa-aa`) through an agent.
    """

    def __init__(self, agent: Agent, effective_canister_id: str = MANAGEMENT_CANISTER_ID):
        self.agent = agent
        self.effective_canister_id = effective_canister_id

    def provisional_create_canister_with_cycles(self, cycles: int) -> str:
        reply = self.agent.update_raw(
            MANAGEMENT_CANISTER_ID,
            "provisional_create_canister_with_cycles",
            candid.encode_provisional_create(cycles),
            return_type=[candid.CanisterIdRecordType],
            effective_canister_id=self.effective_canister_id,
        )
        record = _first_value(reply)
        canister_id = candid.principal_text(candid.field(record, "canister_id"))
        logger.debug(f"Created canister {canister_id}")
        return canister_id

    def install_code(
        self, mode: InstallMode, canister_id: str, wasm_module: bytes, arg: bytes
    ) -> None:
        self.agent.update_raw(
            MANAGEMENT_CANISTER_ID,
            "install_code",
            candid.encode_install_code(mode, canister_id, wasm_module, arg),
            effective_canister_id=canister_id,
        )

    def canister_status(self, canister_id: str) -> CanisterStatus:
        reply = self.agent.update_raw(
            MANAGEMENT_CANISTER_ID,
            "canister_status",
            candid.encode_canister_id(canister_id),
            effective_canister_id=canister_id,
        )
        record = _first_value(reply) or {}
        module_hash = _unwrap_opt(candid.field(record, "module_hash"))
        return CanisterStatus(
            status=candid.variant_label(candid.field(record, "status"), CANISTER_STATUSES),
            cycles=candid.field(record, "cycles"),
            memory_size=candid.field(record, "memory_size"),
            module_hash=candid.blob(module_hash).hex() if module_hash else None,
        )

    def fetch_canister_logs(self, canister_id: str) -> List[CanisterLogRecord]:
        reply = self.agent.query_raw(
            MANAGEMENT_CANISTER_ID,
            "fetch_canister_logs",
            candid.encode_canister_id(canister_id),
            effective_canister_id=canister_id,
        )
        record = _first_value(reply) or {}
        return [
            CanisterLogRecord(
                idx=candid.field(entry, "idx"),
                timestamp_nanos=candid.field(entry, "timestamp_nanos"),
                content=candid.blob(candid.field(entry, "content")).decode(
                    "utf-8", errors="replace"
                ),
            )
            for entry in candid.field(record, "canister_log_records", default=[])
        ]


class AssetCanister:
    """
    Proxy to an installed asset storage canister.
    """

    def __init__(self, agent: Agent, canister_id: str):
        self.agent = agent
        self.canister_id = canister_id

    def store(self, record: AssetRecord) -> None:
        self.agent.update_raw(self.canister_id, "store", candid.encode_store(record))

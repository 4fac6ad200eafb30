"""
Candid types and argument encoding for the management canister and the
asset canister, on top of `ic.candid`.
"""
from typing import Any, Dict, Optional

from ic.candid import Types, encode
from ic.principal import Principal

from .model import AssetRecord, InstallArgs, InstallMode

InstallArgsType = Types.Record(
    {
        "owner": Types.Principal,
        "name": Types.Text,
    }
)

InstallModeType = Types.Variant(
    {
        "install": Types.Null,
        "reinstall": Types.Null,
        "upgrade": Types.Null,
    }
)

CanisterSettingsType = Types.Record(
    {
        "controllers": Types.Opt(Types.Vec(Types.Principal)),
        "compute_allocation": Types.Opt(Types.Nat),
        "memory_allocation": Types.Opt(Types.Nat),
        "freezing_threshold": Types.Opt(Types.Nat),
    }
)

ProvisionalCreateArgsType = Types.Record(
    {
        "amount": Types.Opt(Types.Nat),
        "settings": Types.Opt(CanisterSettingsType),
    }
)

CanisterIdRecordType = Types.Record({"canister_id": Types.Principal})

InstallCodeArgsType = Types.Record(
    {
        "mode": InstallModeType,
        "canister_id": Types.Principal,
        "wasm_module": Types.Vec(Types.Nat8),
        "arg": Types.Vec(Types.Nat8),
    }
)

StoreArgsType = Types.Record(
    {
        "key": Types.Text,
        "content_type": Types.Text,
        "content_encoding": Types.Text,
        "content": Types.Vec(Types.Nat8),
        "sha256": Types.Opt(Types.Vec(Types.Nat8)),
        "aliased": Types.Opt(Types.Bool),
    }
)


def _opt(value: Optional[Any]) -> list:
    return [] if value is None else [value]


def encode_install_args(init_args: InstallArgs) -> bytes:
    return encode(
        [
            {
                "type": InstallArgsType,
                "value": {"owner": init_args.owner, "name": init_args.name},
            }
        ]
    )


def encode_provisional_create(cycles: Optional[int]) -> bytes:
    return encode(
        [
            {
                "type": ProvisionalCreateArgsType,
                "value": {"amount": _opt(cycles), "settings": []},
            }
        ]
    )


def encode_canister_id(canister_id: str) -> bytes:
    return encode([{"type": CanisterIdRecordType, "value": {"canister_id": canister_id}}])


def encode_install_code(
    mode: InstallMode, canister_id: str, wasm_module: bytes, arg: bytes
) -> bytes:
    return encode(
        [
            {
                "type": InstallCodeArgsType,
                "value": {
                    "mode": {mode.value: None},
                    "canister_id": canister_id,
                    "wasm_module": list(wasm_module),
                    "arg": list(arg),
                },
            }
        ]
    )


def encode_store(record: AssetRecord) -> bytes:
    return encode(
        [
            {
                "type": StoreArgsType,
                "value": {
                    "key": record.key,
                    "content_type": record.content_type,
                    "content_encoding": record.content_encoding,
                    "content": list(record.content),
                    "sha256": _opt(list(record.sha256) if record.sha256 else None),
                    "aliased": _opt(record.aliased),
                },
            }
        ]
    )


def field_hash(name: str) -> int:
    """
    Candid id of a record field or variant label, as found on the wire
    when a reply is decoded without its type.
    """
    h = 0
    for byte in name.encode("utf-8"):
        h = (h * 223 + byte) % (1 << 32)
    return h


def field(record: Dict[Any, Any], name: str, default: Any = None) -> Any:
    """
    Read a field of a decoded record, whether it is keyed by its name or
    by its Candid hash.
    """
    h = field_hash(name)
    for key in (name, f"_{h}", f"_{h}_", h):
        if key in record:
            return record[key]
    return default


def variant_label(value: Any, labels) -> Optional[str]:
    if isinstance(value, str):
        return value
    if not isinstance(value, dict):
        return None
    for label in labels:
        if field(value, label, default=KeyError) is not KeyError:
            return label
    return None


def principal_text(value: Any) -> str:
    if isinstance(value, Principal):
        return value.to_str()
    if isinstance(value, (bytes, bytearray)):
        return Principal(bytes(value)).to_str()
    return str(value)


def blob(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return bytes(value or [])

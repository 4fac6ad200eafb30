import logging
from pathlib import Path
from typing import Union

from ic.agent import Agent

from ..candid import encode_install_args
from ..conf import Settings, settings as default_settings
from ..exceptions import WasmModuleError
from ..management import AssetCanister, ManagementCanister
from ..model import (
    DeploymentResult,
    InstallArgs,
    InstallMode,
    StageName,
    StagePolicy,
    StageResult,
)
from .assets import BuildTree, asset_key, canister_urls, get_mime_type, upload
from .reporting import fetch_logs, report_status

logger = logging.getLogger(__name__)


def provision(management: ManagementCanister, cycles: int) -> StageResult:
    """
    Create a new canister funded with `cycles`. Every call creates a new one.
    """
    try:
        canister_id = management.provisional_create_canister_with_cycles(cycles)
    except Exception as e:
        logger.error(f"Error creating canister: {e}")
        return StageResult.failed(StageName.PROVISION, e)
    logger.info(f"Created canister {canister_id} with {cycles} cycles")
    return StageResult.succeeded(StageName.PROVISION, canister_id)


def read_wasm_module(wasm_path: Union[str, Path]) -> bytes:
    path = Path(wasm_path)
    if not path.is_file():
        raise WasmModuleError(f"WASM file {path} could not be read.")
    wasm_module = path.read_bytes()
    if not wasm_module:
        raise WasmModuleError(f"WASM file {path} is empty.")
    return wasm_module


def install(
    management: ManagementCanister,
    canister_id: str,
    wasm_path: Union[str, Path],
    init_args: InstallArgs,
    mode: InstallMode = InstallMode.INSTALL,
) -> StageResult:
    """
    Install the WASM module at `wasm_path` into the canister.

    The module is read and the init argument encoded before any remote call,
    so a missing or empty module never reaches `install_code`.
    """
    try:
        wasm_module = read_wasm_module(wasm_path)
        arg = encode_install_args(init_args)
        logger.info(
            f"Installing {wasm_path} ({len(wasm_module)} bytes) "
            f"into canister {canister_id}, mode {mode.value}"
        )
        management.install_code(mode, canister_id, wasm_module, arg)
    except Exception as e:
        logger.error(f"Error during code installation: {e}")
        return StageResult.failed(StageName.INSTALL, e)
    logger.info(f"Code installed into canister {canister_id}")
    return StageResult.succeeded(StageName.INSTALL)


def deploy_frontend(agent: Agent, settings: Settings = default_settings) -> DeploymentResult:
    """
    Create a canister, install the asset storage module into it and upload
    the build directory.

    Status and log reports never stop the deployment. A failed install
    stops it only when `INSTALL_FAILURE_POLICY` is `abort`. The remaining
    stages are then recorded as skipped.
    """
    result = DeploymentResult(host=settings.host)
    management = ManagementCanister(agent, settings.PROVISIONAL_EFFECTIVE_CANISTER_ID)

    provisioned = provision(management, settings.CYCLES)
    result.stages.append(provisioned)
    if not provisioned.ok:
        return result
    canister_id: str = provisioned.value
    result.canister_id = canister_id

    result.stages.append(report_status(management, canister_id))
    result.stages.append(fetch_logs(management, canister_id))

    installed = install(
        management,
        canister_id,
        wasm_path=Path.cwd() / settings.WASM_PATH,
        init_args=InstallArgs(owner=settings.OWNER_PRINCIPAL, name=settings.CANISTER_NAME),
        mode=settings.INSTALL_MODE,
    )
    result.stages.append(installed)
    if not installed.ok and settings.INSTALL_FAILURE_POLICY == StagePolicy.ABORT:
        logger.warning("Installation failed, skipping asset upload")
        result.stages.append(
            StageResult.skipped(StageName.UPLOAD, "installation failed")
        )
        return result

    actor = AssetCanister(agent, canister_id)
    uploaded = upload(actor, canister_id, settings.BUILD_DIR, settings)
    result.stages.append(uploaded)
    if uploaded.ok:
        result.urls = canister_urls(canister_id, settings.host)
    return result


__all__ = [
    "BuildTree",
    "asset_key",
    "deploy_frontend",
    "fetch_logs",
    "get_mime_type",
    "install",
    "provision",
    "read_wasm_module",
    "report_status",
    "upload",
]

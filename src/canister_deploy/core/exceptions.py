"""Deployment specific exceptions."""


class DeploymentError(Exception):
    """Base class for deployment errors."""


class MissingCanisterIdError(DeploymentError):
    """Raised when an operation needs a canister id and none was given."""


class WasmModuleError(DeploymentError):
    """Raised when the WASM module is missing or empty."""


class AssetUploadError(DeploymentError):
    """Raised when an asset could not be read or stored."""

    def __init__(self, key: str, cause: BaseException):
        super().__init__(f"Failed to upload {key}: {cause}")
        self.key = key
        self.cause = cause


class CanisterRejectError(DeploymentError):
    """Raised when the replica rejects a call to a canister."""

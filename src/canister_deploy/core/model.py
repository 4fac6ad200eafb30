from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class InstallMode(str, Enum):
    INSTALL = "install"
    REINSTALL = "reinstall"
    UPGRADE = "upgrade"


class StageName(str, Enum):
    PROVISION = "provision"
    STATUS = "status"
    LOGS = "logs"
    INSTALL = "install"
    UPLOAD = "upload"


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class StagePolicy(str, Enum):
    CONTINUE = "continue"  # record the failure, run the next stages
    ABORT = "abort"  # stop the deployment after this stage


class InstallArgs(BaseModel):
    """
    Init argument of the asset storage module, encoded as
    `record { owner : principal; name : text }`.
    """

    owner: str
    name: str


class AssetRecord(BaseModel):
    """
    Argument of the asset canister's `store` method. One is built per file
    and sent right away.
    """

    key: str
    """
    Path of the asset in the canister, always `/`-rooted with forward slashes.
    """
    content: bytes
    content_type: str
    content_encoding: str
    sha256: Optional[bytes] = None
    aliased: Optional[bool] = None


class CanisterLogRecord(BaseModel):
    idx: int
    timestamp_nanos: int
    content: str


class CanisterStatus(BaseModel):
    status: Optional[str] = None
    cycles: Optional[int] = None
    memory_size: Optional[int] = None
    module_hash: Optional[str] = None


class UploadReport(BaseModel):
    uploaded: List[str] = []
    """
    Keys stored so far, in upload order.
    """
    failed_key: Optional[str] = None
    """
    Key whose read or store call failed, or the directory whose walk failed,
    which stopped the upload.
    """

    @property
    def complete(self) -> bool:
        return self.failed_key is None


class StageResult(BaseModel):
    stage: StageName
    status: StageStatus
    value: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.SUCCEEDED

    @classmethod
    def succeeded(cls, stage: StageName, value: Any = None) -> "StageResult":
        return cls(stage=stage, status=StageStatus.SUCCEEDED, value=value)

    @classmethod
    def failed(
        cls, stage: StageName, error: BaseException, value: Any = None
    ) -> "StageResult":
        return cls(stage=stage, status=StageStatus.FAILED, value=value, error=str(error))

    @classmethod
    def skipped(cls, stage: StageName, reason: str) -> "StageResult":
        return cls(stage=stage, status=StageStatus.SKIPPED, error=reason)


class DeploymentResult(BaseModel):
    host: str
    canister_id: Optional[str] = None
    stages: List[StageResult] = []
    urls: List[str] = []

    def stage(self, name: StageName) -> Optional[StageResult]:
        for result in self.stages:
            if result.stage == name:
                return result
        return None

    @property
    def failed_stages(self) -> List[StageName]:
        return [r.stage for r in self.stages if r.status == StageStatus.FAILED]

    @property
    def succeeded(self) -> bool:
        return all(r.ok for r in self.stages) and bool(self.stages)

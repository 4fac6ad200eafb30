import logging
import os
from pathlib import Path
from typing import Iterator, List, Protocol, Union

from ..conf import Settings, settings as default_settings
from ..constants import (
    CONTENT_ENCODING_IDENTITY,
    DEFAULT_MIME_TYPE,
    GATEWAY_CANISTER_URL,
    LOCAL_CANISTER_URL,
    MIME_TYPES,
)
from ..exceptions import AssetUploadError
from ..model import AssetRecord, StageName, StageResult, UploadReport

logger = logging.getLogger(__name__)


class AssetStore(Protocol):
    def store(self, record: AssetRecord) -> None:
        ...


class BuildTree:
    """
    Regular files under `root`, as paths relative to it.

    Walked depth first in filesystem enumeration order, lazily. Every
    iteration starts a new walk.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def __iter__(self) -> Iterator[str]:
        return self._walk(self.root)

    def _walk(self, directory: Path) -> Iterator[str]:
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._walk(Path(entry.path))
                elif entry.is_file():
                    yield os.path.relpath(entry.path, self.root)


def get_mime_type(file_name: str) -> str:
    for suffix, mime_type in MIME_TYPES:
        if file_name.endswith(suffix):
            return mime_type
    return DEFAULT_MIME_TYPE


def asset_key(relative_path: str) -> str:
    return "/" + relative_path.replace("\\", "/")


def build_asset_record(root: Path, relative_path: str) -> AssetRecord:
    content = (root / relative_path).read_bytes()
    return AssetRecord(
        key=asset_key(relative_path),
        content=content,
        content_type=get_mime_type(relative_path),
        content_encoding=CONTENT_ENCODING_IDENTITY,
    )


def _walk_failure_key(root: Path, error: BaseException) -> str:
    filename = getattr(error, "filename", None)
    if not filename:
        return "/"
    relative_path = os.path.relpath(filename, root)
    return "/" if relative_path == "." else asset_key(relative_path)


def canister_urls(canister_id: str, host: str) -> List[str]:
    return [
        LOCAL_CANISTER_URL.format(canister_id=canister_id),
        GATEWAY_CANISTER_URL.format(host=host, canister_id=canister_id),
    ]


def upload(
    actor: AssetStore,
    canister_id: str,
    build_root: Union[str, Path],
    settings: Settings = default_settings,
) -> StageResult:
    """
    Store every file of `build_root` in the asset canister, one at a time.

    The first file that cannot be read or stored stops the upload. The
    returned result carries an `UploadReport` of the keys stored before it.
    """
    root = Path(build_root)
    report = UploadReport()
    try:
        logger.info(f"Uploading assets from {root} to canister {canister_id}")
        for relative_path in BuildTree(root):
            key = asset_key(relative_path)
            try:
                record = build_asset_record(root, relative_path)
                actor.store(record)
            except Exception as e:
                report.failed_key = key
                raise AssetUploadError(key, e) from e
            logger.debug(f"Stored {key} ({record.content_type}, {len(record.content)} bytes)")
            report.uploaded.append(key)
    except Exception as e:
        if report.failed_key is None:
            # The walk itself failed, on the build root or a directory below it
            report.failed_key = _walk_failure_key(root, e)
        logger.error(f"Error uploading assets: {e}")
        logger.info(f"{len(report.uploaded)} assets were stored before the failure")
        return StageResult.failed(StageName.UPLOAD, e, value=report)

    urls = canister_urls(canister_id, settings.host)
    logger.info(
        f"{len(report.uploaded)} assets uploaded to canister {canister_id}.\n\n"
        "Available on:\n" + "".join(f"  {url}\n" for url in urls)
    )
    return StageResult.succeeded(StageName.UPLOAD, report)

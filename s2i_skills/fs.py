from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from s2i_skills.errors import FileSystemError

logger = logging.getLogger(__name__)

WORKING_DIR_PREFIX = "s2i-"


class LocalFileSystem:
    def __init__(self, tmp_dir: str | Path | None = None) -> None:
        self.tmp_dir = Path(tmp_dir) if tmp_dir else None

    def create_working_directory(self) -> Path:
        try:
            if self.tmp_dir is not None:
                self.tmp_dir.mkdir(parents=True, exist_ok=True)
            path = tempfile.mkdtemp(prefix=WORKING_DIR_PREFIX, dir=self.tmp_dir)
        except OSError as exc:
            raise FileSystemError(self.tmp_dir or tempfile.gettempdir(), "Unable to create working directory") from exc
        logger.debug("Created working directory %s", path)
        return Path(path)

    def copy(self, src: str | Path, dst: Path) -> None:
        src_path = Path(src)
        if not src_path.exists():
            raise FileSystemError(src_path, "Source path does not exist")
        if not src_path.is_dir():
            raise FileSystemError(src_path, "Source path is not a directory")
        logger.debug("Copying %s to %s", src_path, dst)
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(src_path, dst, symlinks=True)
        except (OSError, shutil.Error) as exc:
            raise FileSystemError(src_path, f"Unable to copy source to '{dst}'") from exc

    def write_file(self, path: Path, data: bytes) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise FileSystemError(path, "Unable to write file") from exc

    def remove_directory(self, path: str | Path) -> None:
        logger.debug("Removing directory %s", path)
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise FileSystemError(path, "Unable to remove directory") from exc

    def open(self, path: Path) -> BinaryIO:
        try:
            return open(path, "rb")
        except OSError as exc:
            raise FileSystemError(path, "Unable to open file") from exc

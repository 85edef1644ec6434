from __future__ import annotations

import logging
import os
import tarfile
import tempfile
from pathlib import Path

from s2i_skills.errors import ArchiveError

logger = logging.getLogger(__name__)

TAR_PREFIX = "tar"
TAR_SUFFIX = ".tar"


def _iter_members(source_dir: Path) -> list[Path]:
    members: list[Path] = []
    for root, dirs, files in os.walk(source_dir):
        dirs.sort()
        root_path = Path(root)
        # Symlinked directories are archived as links, not descended into.
        for name in list(dirs):
            if (root_path / name).is_symlink():
                dirs.remove(name)
                files.append(name)
        members.extend(root_path / name for name in dirs)
        members.extend(root_path / name for name in sorted(files))
    return sorted(members, key=lambda item: item.relative_to(source_dir).as_posix())


class TarArchiver:
    def create_tar_file(self, base_dir: str | Path, source_dir: str | Path) -> Path:
        """Archive `source_dir` into a new tar file created inside `base_dir`.

        Member names are relative to `source_dir`, so a file at
        `<source_dir>/Dockerfile` is stored as `Dockerfile`.
        """
        source_path = Path(source_dir)
        if not source_path.is_dir():
            raise ArchiveError(f"Archive source '{source_path}' is not a directory")
        try:
            fd, tar_name = tempfile.mkstemp(prefix=TAR_PREFIX, suffix=TAR_SUFFIX, dir=base_dir)
        except OSError as exc:
            raise ArchiveError(f"Unable to create tar file in '{base_dir}'") from exc

        tar_path = Path(tar_name)
        try:
            with os.fdopen(fd, "wb") as handle, tarfile.open(fileobj=handle, mode="w") as tar:
                for member in _iter_members(source_path):
                    arcname = member.relative_to(source_path).as_posix()
                    tar.add(str(member), arcname=arcname, recursive=False)
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(f"Unable to archive '{source_path}'") from exc
        logger.debug("Created tar file %s from %s", tar_path, source_path)
        return tar_path

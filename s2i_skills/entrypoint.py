from __future__ import annotations

import logging
import re
import stat
from pathlib import Path

from s2i_skills.errors import EntrypointNotFoundError

logger = logging.getLogger(__name__)

VALID_ENTRYPOINTS = [
    re.compile(r"^run(\.sh)?$"),
    re.compile(r"^start(\.sh)?$"),
    re.compile(r"^exec$"),
    re.compile(r"^execute$"),
]


def _is_valid_entrypoint(path: Path) -> bool:
    if not any(pattern.match(path.name) for pattern in VALID_ENTRYPOINTS):
        return False
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    if not stat.S_ISREG(mode):
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def guess_entrypoint(directory: str | Path) -> str:
    """Return the name of the executable start script at the top of `directory`."""
    root = Path(directory)
    try:
        candidates = sorted(root.iterdir(), key=lambda item: item.name)
    except OSError as exc:
        raise EntrypointNotFoundError(root, "Unable to list source directory") from exc

    for candidate in candidates:
        if _is_valid_entrypoint(candidate):
            logger.debug("Found valid entrypoint: %s", candidate.name)
            return candidate.name
    raise EntrypointNotFoundError(root)

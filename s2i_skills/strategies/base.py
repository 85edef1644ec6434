from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from collections.abc import Iterator

from s2i_skills.errors import S2IError
from s2i_skills.models import BuildRequest, BuildResult

PHASE_PREPARE = "prepare"
PHASE_DESCRIPTOR = "descriptor"
PHASE_PACKAGE = "package"
PHASE_BUILD = "build"


@contextlib.contextmanager
def phase(name: str) -> Iterator[None]:
    """Tag any S2IError escaping the block with the phase it failed in."""
    try:
        yield
    except S2IError as exc:
        if exc.phase is None:
            exc.phase = name
        raise


class Strategy(ABC):
    name: str = ""

    @abstractmethod
    def build(self, request: BuildRequest) -> BuildResult:
        """Turn the request's source and base image into a tagged image."""

from __future__ import annotations

from pathlib import Path


class S2IError(Exception):
    """Base for every failure surfaced by a build strategy.

    `phase` names the build phase the error escaped from. Collaborators leave
    it unset; the strategy stamps it before re-raising.
    """

    phase: str | None = None

    def __init__(self, message: str, *, phase: str | None = None) -> None:
        super().__init__(message)
        if phase is not None:
            self.phase = phase


class EngineUnavailableError(S2IError):
    pass


class ImagePullError(S2IError):
    def __init__(self, image: str, detail: str, *, phase: str | None = None) -> None:
        self.image = image
        super().__init__(f"Unable to pull image '{image}': {detail}", phase=phase)


class ImageBuildError(S2IError):
    def __init__(self, name: str, detail: str, *, phase: str | None = None) -> None:
        self.name = name
        super().__init__(f"Docker build of '{name}' failed: {detail}", phase=phase)


class SourceControlError(S2IError):
    pass


class CloneError(SourceControlError):
    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(f"Unable to clone '{source}': {detail}")


class CheckoutError(SourceControlError):
    def __init__(self, ref: str, detail: str) -> None:
        self.ref = ref
        super().__init__(f"Unable to checkout '{ref}': {detail}")


class FileSystemError(S2IError):
    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = str(path)
        super().__init__(f"{detail}: '{self.path}'")


class ArchiveError(S2IError):
    pass


class EntrypointNotFoundError(S2IError):
    def __init__(self, directory: str | Path, detail: str = "No valid entrypoint found") -> None:
        self.directory = str(directory)
        super().__init__(f"{detail} in '{self.directory}'")

"""Collaborator protocols consumed by the build strategies."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, TextIO


class Engine(Protocol):
    def pull_image(self, image: str) -> None:
        """Pull `image` unconditionally."""
        ...

    def ensure_pulled(self, image: str) -> None:
        """Pull `image` only when it is not present locally."""
        ...

    def build_image(self, name: str, context: BinaryIO, output: TextIO, dockerfile: str = ...) -> None:
        """Build a tar build context into an image tagged `name` using `dockerfile` at its root."""
        ...


class SourceControl(Protocol):
    def is_clone_spec(self, source: str) -> bool:
        ...

    def clone(self, source: str, dest: Path) -> None:
        ...

    def checkout(self, repo_dir: Path, ref: str) -> None:
        ...


class FileSystem(Protocol):
    def create_working_directory(self) -> Path:
        ...

    def copy(self, src: str | Path, dst: Path) -> None:
        ...

    def write_file(self, path: Path, data: bytes) -> None:
        ...

    def remove_directory(self, path: str | Path) -> None:
        ...

    def open(self, path: Path) -> BinaryIO:
        ...


class Archiver(Protocol):
    def create_tar_file(self, base_dir: str | Path, source_dir: str | Path) -> Path:
        """Write a tar of `source_dir` into `base_dir` and return its path."""
        ...

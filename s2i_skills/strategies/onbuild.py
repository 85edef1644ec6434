"""ONBUILD strategy.

Used when the base image carries no s2i scripts but records ONBUILD
instructions: the source is staged under `<working_dir>/upload/src`, a two line
Dockerfile deriving from the base image is added, and the tree is handed to
Docker as a plain build context.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, TextIO

from s2i_skills.archive import TarArchiver
from s2i_skills.config import DEFAULT_DOCKERFILE_NAME, Settings
from s2i_skills.engine import DockerEngine
from s2i_skills.entrypoint import guess_entrypoint
from s2i_skills.errors import FileSystemError, ImagePullError
from s2i_skills.fs import LocalFileSystem
from s2i_skills.interfaces import Archiver, Engine, FileSystem, SourceControl
from s2i_skills.models import BuildContext, BuildRequest, BuildResult
from s2i_skills.scm import GitSourceControl
from s2i_skills.strategies.base import (
    PHASE_BUILD,
    PHASE_DESCRIPTOR,
    PHASE_PACKAGE,
    PHASE_PREPARE,
    Strategy,
    phase,
)

logger = logging.getLogger(__name__)


def dockerfile_content(base_image: str, entrypoint: str) -> str:
    return f"FROM {base_image}\nCMD [\"{entrypoint}\"]\n"


class OnBuild(Strategy):
    name = "onbuild"

    def __init__(
        self,
        engine: Engine,
        scm: SourceControl,
        fs: FileSystem,
        archiver: Archiver,
        *,
        entrypoint_guesser: Callable[[Path], str] = guess_entrypoint,
        dockerfile_name: str = DEFAULT_DOCKERFILE_NAME,
        output: TextIO | None = None,
    ) -> None:
        self.engine = engine
        self.scm = scm
        self.fs = fs
        self.archiver = archiver
        self.entrypoint_guesser = entrypoint_guesser
        self.dockerfile_name = dockerfile_name
        self.output = output

    @classmethod
    def from_settings(cls, settings: Settings) -> "OnBuild":
        return cls(
            engine=DockerEngine.connect(settings.docker_host),
            scm=GitSourceControl(),
            fs=LocalFileSystem(settings.tmp_dir),
            archiver=TarArchiver(),
            dockerfile_name=settings.dockerfile_name,
        )

    def pull_base_image(self, request: BuildRequest) -> list[str]:
        """Make the base image available locally.

        A failed forced pull is reported back as a warning instead of raised;
        the build then relies on whatever copy of the image is cached.
        """
        if not request.force_pull:
            self.engine.ensure_pulled(request.base_image)
            return []
        try:
            self.engine.pull_image(request.base_image)
        except ImagePullError as exc:
            logger.warning("Forced pull failed, using the local image if present: %s", exc)
            return [f"Forced pull of '{request.base_image}' failed: {exc}"]
        return []

    def create_context(self, messages: list[str] | None = None) -> BuildContext:
        working_dir = self.fs.create_working_directory()
        return BuildContext(working_dir=str(working_dir), messages=tuple(messages or ()))

    def fetch_source(self, request: BuildRequest, context: BuildContext) -> None:
        target = context.source_dir
        if not self.scm.is_clone_spec(request.source):
            self.fs.copy(request.source, target)
            return

        self.scm.clone(request.source, target)
        if not request.ref:
            return
        self.scm.checkout(target, request.ref)

    def prepare(self, request: BuildRequest) -> BuildContext:
        """Pull the base image and stage the source in a fresh working directory.

        The working directory is removed again if the source cannot be staged.
        """
        context = self.create_context(self.pull_base_image(request))
        try:
            self.fetch_source(request, context)
        except Exception:
            self.cleanup(request, context)
            raise
        return context

    def create_dockerfile(self, request: BuildRequest, context: BuildContext) -> Path:
        entrypoint = self.entrypoint_guesser(context.source_dir)
        path = context.source_dir / self.dockerfile_name
        content = dockerfile_content(request.base_image, entrypoint)
        self.fs.write_file(path, content.encode("utf-8"))
        return path

    def source_tar(self, context: BuildContext) -> BinaryIO:
        tar_path = self.archiver.create_tar_file(context.working_dir, context.source_dir)
        return self.fs.open(tar_path)

    def cleanup(self, request: BuildRequest, context: BuildContext) -> None:
        if request.preserve_working_dir:
            return
        try:
            self.fs.remove_directory(context.working_dir)
        except FileSystemError as exc:
            logger.warning("Unable to remove working directory: %s", exc)

    def build(self, request: BuildRequest) -> BuildResult:
        logger.debug("Preparing the source code for build")
        with phase(PHASE_PREPARE):
            context = self.prepare(request)

        try:
            logger.debug("Creating application Dockerfile")
            with phase(PHASE_DESCRIPTOR):
                self.create_dockerfile(request, context)

            logger.debug("Creating application source code image")
            with phase(PHASE_PACKAGE):
                tar_stream = self.source_tar(context)

            logger.debug("Building the application source")
            with tar_stream, phase(PHASE_BUILD):
                self.engine.build_image(
                    request.tag,
                    tar_stream,
                    self.output or sys.stdout,
                    dockerfile=self.dockerfile_name,
                )
        finally:
            logger.debug("Cleaning up the working directory")
            self.cleanup(request, context)

        return BuildResult(
            success=True,
            working_dir=context.working_dir,
            image_id=request.tag,
            messages=list(context.messages),
        )

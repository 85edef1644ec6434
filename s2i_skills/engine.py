from __future__ import annotations

import logging
from typing import Any, BinaryIO, TextIO

import docker
from docker.errors import APIError, BuildError, DockerException, ImageNotFound

from s2i_skills.config import DEFAULT_DOCKERFILE_NAME
from s2i_skills.errors import EngineUnavailableError, ImageBuildError, ImagePullError

logger = logging.getLogger(__name__)


def new_docker_client(docker_host: str | None = None):
    try:
        if docker_host:
            client = docker.DockerClient(base_url=docker_host)
        else:
            client = docker.from_env()
        client.ping()
        return client
    except DockerException as exc:
        target = docker_host or "the default Docker host"
        raise EngineUnavailableError(f"Docker is not available at {target}.") from exc


def _error_detail(entry: dict[str, Any]) -> str:
    detail = entry.get("errorDetail") or {}
    return str(entry.get("error") or detail.get("message") or "unknown error").strip()


class DockerEngine:
    def __init__(self, client) -> None:
        self.client = client

    @classmethod
    def connect(cls, docker_host: str | None = None) -> "DockerEngine":
        return cls(new_docker_client(docker_host))

    def image_exists(self, image: str) -> bool:
        try:
            self.client.images.get(image)
            return True
        except ImageNotFound:
            return False

    def pull_image(self, image: str) -> None:
        logger.debug("Pulling image %s", image)
        try:
            self.client.images.pull(image)
        except DockerException as exc:
            raise ImagePullError(image, str(exc)) from exc

    def ensure_pulled(self, image: str) -> None:
        try:
            if self.image_exists(image):
                logger.debug("Image %s available locally", image)
                return
        except DockerException as exc:
            raise ImagePullError(image, str(exc)) from exc
        self.pull_image(image)

    def build_image(
        self,
        name: str,
        context: BinaryIO,
        output: TextIO,
        dockerfile: str = DEFAULT_DOCKERFILE_NAME,
    ) -> None:
        try:
            stream = self.client.api.build(
                fileobj=context,
                custom_context=True,
                dockerfile=dockerfile,
                tag=name,
                decode=True,
                rm=True,
                forcerm=True,
            )
            for entry in stream:
                if "stream" in entry:
                    output.write(entry["stream"])
                    output.flush()
                if "error" in entry or "errorDetail" in entry:
                    raise ImageBuildError(name, _error_detail(entry))
        except (BuildError, APIError, DockerException) as exc:
            raise ImageBuildError(name, str(exc)) from exc

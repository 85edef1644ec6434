from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

ENV_DOCKER_HOST = "S2I_DOCKER_HOST"
ENV_TMP_DIR = "S2I_TMP_DIR"
ENV_DOCKERFILE_NAME = "S2I_DOCKERFILE_NAME"

DEFAULT_DOCKERFILE_NAME = "Dockerfile"


@dataclass(frozen=True)
class Settings:
    docker_host: str | None = None
    tmp_dir: str | None = None
    dockerfile_name: str = DEFAULT_DOCKERFILE_NAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            docker_host=env.get(ENV_DOCKER_HOST) or None,
            tmp_dir=env.get(ENV_TMP_DIR) or None,
            dockerfile_name=env.get(ENV_DOCKERFILE_NAME) or DEFAULT_DOCKERFILE_NAME,
        )

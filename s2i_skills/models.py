from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

UPLOAD_DIR_NAME = "upload"
SOURCE_DIR_NAME = "src"


class BuildRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str = Field(..., description="Filesystem path or git clone spec of the application source")
    ref: Optional[str] = Field(None, description="Optional git ref to checkout after cloning")
    base_image: str = Field(..., description="Image carrying the ONBUILD instructions")
    tag: str = Field(..., description="Name assigned to the produced image")
    force_pull: bool = Field(False, description="Always pull the base image, even if present locally")
    preserve_working_dir: bool = Field(False, description="Keep the working directory after the build")


class BuildContext(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    working_dir: str
    messages: tuple[str, ...] = ()

    @property
    def upload_dir(self) -> Path:
        return Path(self.working_dir) / UPLOAD_DIR_NAME

    @property
    def source_dir(self) -> Path:
        return self.upload_dir / SOURCE_DIR_NAME


class BuildResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool
    working_dir: str
    image_id: str
    messages: list[str] = Field(default_factory=list)


def model_dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json")

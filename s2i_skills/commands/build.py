from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Any

from s2i_skills.config import Settings
from s2i_skills.errors import S2IError
from s2i_skills.models import BuildRequest, model_dump
from s2i_skills.runtime import CommandRun
from s2i_skills.strategies.factory import new_strategy


def _settings(args: Any) -> Settings:
    settings = Settings.from_env()
    docker_host = getattr(args, "docker_host", None)
    if docker_host:
        settings = dataclasses.replace(settings, docker_host=docker_host)
    return settings


def _request(args: Any) -> BuildRequest:
    return BuildRequest(
        source=args.source,
        ref=getattr(args, "ref", None) or None,
        base_image=args.base_image,
        tag=args.tag,
        force_pull=bool(getattr(args, "force_pull", False)),
        preserve_working_dir=bool(getattr(args, "preserve_working_dir", False)),
    )


def run(args: Any) -> int:
    report = getattr(args, "report", None)
    command_run = CommandRun(command="build", report_path=Path(report) if report else None)
    request = _request(args)
    payload: dict[str, Any] = {
        "strategy": args.strategy,
        "request": model_dump(request),
        "result": None,
        "error": None,
    }

    try:
        strategy = new_strategy(args.strategy, _settings(args))
        result = strategy.build(request)
    except S2IError as exc:
        failed_phase = exc.phase or "setup"
        print(f"[s2i] build failed during {failed_phase}: {exc}", file=sys.stderr)
        payload["error"] = {"phase": exc.phase, "type": type(exc).__name__, "message": str(exc)}
        command_run.add_note(f"Build failed during {failed_phase}.")
        return command_run.finalize("fail", emit_json=args.json, **payload)

    payload["result"] = model_dump(result)
    for message in result.messages:
        command_run.add_note(message)
    if request.preserve_working_dir:
        command_run.add_note(f"Working directory preserved at {result.working_dir}")
    print(f"[s2i] built image {result.image_id}", file=sys.stderr)
    return command_run.finalize("pass", emit_json=args.json, **payload)

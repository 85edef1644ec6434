from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from docker.errors import DockerException

from s2i_skills.config import Settings
from s2i_skills.engine import new_docker_client
from s2i_skills.errors import EngineUnavailableError
from s2i_skills.runtime import CommandRun, run_command


def _check_docker(docker_host: str | None) -> dict[str, Any]:
    try:
        client = new_docker_client(docker_host)
    except EngineUnavailableError as exc:
        return {"available": False, "detail": str(exc)}
    try:
        version = client.version().get("Version")
    except DockerException as exc:
        return {"available": False, "detail": str(exc)}
    finally:
        client.close()
    return {"available": True, "version": version}


def _check_git() -> dict[str, Any]:
    if shutil.which("git") is None:
        return {"available": False, "detail": "git is not on PATH"}
    output = run_command(["git", "--version"], cwd=Path.cwd(), timeout_sec=10)
    if output.exit_code != 0:
        return {"available": False, "detail": output.stderr.strip()}
    return {"available": True, "version": output.stdout.strip()}


def run(args: Any) -> int:
    command_run = CommandRun(command="doctor")
    docker_host = getattr(args, "docker_host", None) or Settings.from_env().docker_host

    checks = {
        "docker": _check_docker(docker_host),
        "git": _check_git(),
    }
    failures = sorted(name for name, check in checks.items() if not check["available"])

    if not args.json:
        for name, check in checks.items():
            state = "ok" if check["available"] else "missing"
            print(f"{name}: {state} ({check.get('version') or check.get('detail')})")

    if failures:
        command_run.add_note(f"Unavailable tooling: {', '.join(failures)}")
        return command_run.finalize("fail", emit_json=args.json, checks=checks)

    command_run.add_note("Tooling checks passed.")
    return command_run.finalize("pass", emit_json=args.json, checks=checks)

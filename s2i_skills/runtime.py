from __future__ import annotations

import json
import platform
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

SCHEMA_VERSION = "1.0"


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).replace(microsecond=0).isoformat()


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


@dataclass
class CommandRun:
    command: str
    report_path: Path | None = None
    started_at: str = field(default_factory=utc_now_iso)
    notes: list[str] = field(default_factory=list)

    def add_note(self, note: str) -> None:
        self.notes.append(note)

    def summary(self, status: str, **payload: Any) -> dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "command": self.command,
            "started_at": self.started_at,
            "ended_at": utc_now_iso(),
            "python_version": platform.python_version(),
            "notes": self.notes,
            "status": status,
            **payload,
        }

    def finalize(self, status: str, *, emit_json: bool = False, **payload: Any) -> int:
        summary = self.summary(status, **payload)
        if self.report_path is not None:
            write_json(self.report_path, summary)
        if emit_json:
            print(json.dumps(summary, indent=2, sort_keys=True))
        return 0 if status == "pass" else 1


@dataclass
class CommandResult:
    cmd: list[str]
    cwd: str
    exit_code: int
    stdout: str
    stderr: str


def run_command(cmd: list[str], cwd: Path, timeout_sec: int = 120) -> CommandResult:
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout_sec,
            check=False,
        )
    except FileNotFoundError as exc:
        return CommandResult(cmd=cmd, cwd=str(cwd), exit_code=127, stdout="", stderr=str(exc))
    except subprocess.TimeoutExpired:
        return CommandResult(
            cmd=cmd,
            cwd=str(cwd),
            exit_code=124,
            stdout="",
            stderr=f"Timed out after {timeout_sec}s",
        )
    return CommandResult(
        cmd=cmd,
        cwd=str(cwd),
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )

from __future__ import annotations

import json
import subprocess
from types import SimpleNamespace

from docker.errors import DockerException

from s2i_skills import runtime
from s2i_skills.commands import doctor
from s2i_skills.errors import EngineUnavailableError
from s2i_skills.runtime import CommandResult


class FakeClient:
    def version(self):
        return {"Version": "27.1.1"}

    def close(self):
        pass


def _git_ok(monkeypatch):
    monkeypatch.setattr(doctor.shutil, "which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr(
        doctor,
        "run_command",
        lambda cmd, cwd, timeout_sec=120: CommandResult(cmd, str(cwd), 0, "git version 2.45.0\n", ""),
    )


def test_doctor_passes_when_docker_and_git_available(monkeypatch, capsys):
    _git_ok(monkeypatch)
    monkeypatch.setattr(doctor, "new_docker_client", lambda host: FakeClient())

    code = doctor.run(SimpleNamespace(docker_host=None, json=True))

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "pass"
    assert payload["checks"]["docker"] == {"available": True, "version": "27.1.1"}
    assert payload["checks"]["git"]["version"] == "git version 2.45.0"


def test_doctor_fails_without_docker(monkeypatch, capsys):
    _git_ok(monkeypatch)

    def _unavailable(host):
        raise EngineUnavailableError(f"Docker is not available at {host}.")

    monkeypatch.setattr(doctor, "new_docker_client", _unavailable)

    code = doctor.run(SimpleNamespace(docker_host="tcp://nowhere:2375", json=False))

    assert code == 1
    out = capsys.readouterr().out
    assert "docker: missing" in out
    assert "git: ok" in out


class DyingClient(FakeClient):
    def version(self):
        raise DockerException("Error while fetching server API version: connection reset")


def test_doctor_reports_docker_failing_after_ping(monkeypatch, capsys):
    _git_ok(monkeypatch)
    monkeypatch.setattr(doctor, "new_docker_client", lambda host: DyingClient())

    code = doctor.run(SimpleNamespace(docker_host=None, json=True))

    assert code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["checks"]["docker"]["available"] is False
    assert "connection reset" in payload["checks"]["docker"]["detail"]


def test_doctor_reports_hanging_git(monkeypatch, capsys):
    monkeypatch.setattr(doctor.shutil, "which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr(doctor, "new_docker_client", lambda host: FakeClient())

    def _hang(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr(runtime.subprocess, "run", _hang)

    code = doctor.run(SimpleNamespace(docker_host=None, json=True))

    assert code == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["checks"]["git"]["available"] is False
    assert "Timed out" in payload["checks"]["git"]["detail"]

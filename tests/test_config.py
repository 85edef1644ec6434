from __future__ import annotations

from s2i_skills.config import DEFAULT_DOCKERFILE_NAME, Settings


def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.docker_host is None
    assert settings.tmp_dir is None
    assert settings.dockerfile_name == DEFAULT_DOCKERFILE_NAME


def test_settings_from_environment():
    settings = Settings.from_env(
        {
            "S2I_DOCKER_HOST": "tcp://127.0.0.1:2375",
            "S2I_TMP_DIR": "/var/tmp/s2i",
            "S2I_DOCKERFILE_NAME": "Containerfile",
        }
    )
    assert settings.docker_host == "tcp://127.0.0.1:2375"
    assert settings.tmp_dir == "/var/tmp/s2i"
    assert settings.dockerfile_name == "Containerfile"


def test_settings_read_process_environment(monkeypatch):
    monkeypatch.setenv("S2I_TMP_DIR", "/scratch")
    monkeypatch.delenv("S2I_DOCKER_HOST", raising=False)
    settings = Settings.from_env()
    assert settings.tmp_dir == "/scratch"
    assert settings.docker_host is None

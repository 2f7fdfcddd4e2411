"""Pytest configuration for image_modules tests."""

from pathlib import Path

import pytest
import yaml


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point home and cwd at an empty temp tree so no real settings leak in."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def write_layout(tmp_path):
    """Write a layout manifest and return its path."""

    def _write(data, name: str = "layout.yaml") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(yaml.safe_dump(data))
        return path

    return _write


@pytest.fixture
def sample_layout() -> dict:
    return {
        "boot": ["java.logging", "java.base"],
        "ext": [],
        "app": ["com.example.app"],
        "packages": {
            "java.base": ["java.util", "java.lang", "java.lang.invoke"],
            "java.logging": ["java.util.logging"],
            "com.example.app": ["com.example.app", "com.example.app.internal"],
        },
    }

"""
Pytest configuration and shared fixtures for helmtrace tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from helmtrace.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after each test.

    The CLI installs a DefaultLogger globally; without this, output from
    one CLI test would leak into later tests.
    """
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_base_values() -> dict[str, Any]:
    """
    Provide a sample base values document.

    Shaped like a typical Helm chart values.yaml.
    """
    return {
        "replicaCount": 1,
        "image": {
            "repository": "nginx",
            "tag": "1.25",
            "pullPolicy": "IfNotPresent",
        },
        "service": {
            "type": "ClusterIP",
            "port": 80,
        },
        "ingress": {
            "enabled": False,
            "hosts": ["chart-example.local"],
        },
        "resources": {},
    }


@pytest.fixture
def sample_prod_values() -> dict[str, Any]:
    """Provide a sample production override document."""
    return {
        "replicaCount": 3,
        "image": {
            "tag": "1.25.3",
        },
        "ingress": {
            "enabled": True,
            "hosts": ["web.example.com", "www.example.com"],
        },
        "autoscaling": {
            "enabled": True,
            "minReplicas": 3,
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("values.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return path

    return _create

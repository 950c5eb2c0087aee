"""Locate and read the local kubeconfig file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from meshkit.kube_errors import err_decode_yaml


def kubeconfig_path() -> Path:
    """Return the path named by $KUBECONFIG, or ~/.kube/config."""
    env = os.environ.get("KUBECONFIG", "")
    if env:
        return Path(env)
    return Path.home() / ".kube" / "config"


def get_kube_config(path: str | Path | None = None) -> dict[str, Any]:
    """Read and parse the kubeconfig at ``path`` (default: kubeconfig_path())."""
    target = Path(path) if path is not None else kubeconfig_path()
    try:
        text = target.read_text()
    except OSError as exc:
        raise OSError(f"could not read kubeconfig: {exc}") from exc
    config = yaml.safe_load(text)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise err_decode_yaml(ValueError("kubeconfig is not a mapping"))
    return config


def get_current_context(path: str | Path | None = None) -> str:
    """Return the current-context named in the kubeconfig, or an empty string."""
    return get_kube_config(path).get("current-context") or ""
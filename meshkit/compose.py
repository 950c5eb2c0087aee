"""Validate and normalise Docker Compose files."""

from __future__ import annotations

import json
from typing import Any

import jsonschema
import requests
import yaml

from meshkit.errors import (
    err_expected_type_mismatch,
    err_incompatible_version,
    err_no_version,
    err_reading_remote_file,
    err_remote_file_not_found,
    err_unmarshal,
    err_validate_docker_compose_file,
)

DEFAULT_DOCKER_COMPOSE_SCHEMA_URL = (
    "https://raw.githubusercontent.com/compose-spec/compose-spec/master/schema/compose-spec.json"
)
MAX_COMPATIBLE_VERSION = 3.3
_LIST_KIND = "List"
_TIMEOUT = 30


def _as_text(data: bytes | str) -> str:
    return data.decode() if isinstance(data, (bytes, bytearray)) else data


def validate_compose(manifest: bytes | str, schema: bytes | str) -> None:
    """Raise unless ``manifest`` is a YAML document valid against the JSON ``schema``."""
    try:
        schema_doc = json.loads(_as_text(schema))
        validator_cls = jsonschema.validators.validator_for(schema_doc)
        validator_cls.check_schema(schema_doc)
        document = yaml.safe_load(_as_text(manifest))
        validator_cls(schema_doc).validate(document)
    except (ValueError, yaml.YAMLError, jsonschema.exceptions.ValidationError,
            jsonschema.exceptions.SchemaError) as exc:
        raise err_validate_docker_compose_file(exc) from exc


def _read_remote_file(url: str) -> str:
    try:
        response = requests.get(url, timeout=_TIMEOUT)
    except requests.RequestException as exc:
        raise err_reading_remote_file(exc) from exc
    if response.status_code == 404:
        raise err_remote_file_not_found(url)
    if response.status_code != 200:
        raise err_reading_remote_file(
            RuntimeError(f"status code {response.status_code} for {url}")
        )
    return response.text


def is_manifest_a_docker_compose(manifest: bytes | str, schema_url: str = "") -> None:
    """Raise unless ``manifest`` is a valid compose file per the schema at ``schema_url``."""
    schema = _read_remote_file(schema_url or DEFAULT_DOCKER_COMPOSE_SCHEMA_URL)
    validate_compose(manifest, schema)


def _load_version(manifest: bytes | str) -> str:
    try:
        document = yaml.safe_load(_as_text(manifest))
    except yaml.YAMLError as exc:
        raise err_unmarshal(exc) from exc
    if document is None:
        return ""
    if not isinstance(document, dict):
        raise err_unmarshal(TypeError("compose file is not a mapping"))
    version = document.get("version")
    return "" if version is None else str(version)


def version_check(manifest: bytes | str) -> None:
    """Raise unless the compose file declares a version no newer than 3.3."""
    version = _load_version(manifest)
    if not version:
        raise err_no_version()
    try:
        value = float(version)
    except ValueError as exc:
        raise err_expected_type_mismatch(exc, "float") from exc
    if value > MAX_COMPATIBLE_VERSION:
        raise err_incompatible_version()


def format_compose_file(manifest: bytes | str) -> bytes:
    """Reduce a compose file to its version field, kept as a string.

    A file that cannot be parsed is returned unchanged.
    """
    try:
        version = _load_version(manifest)
    except Exception:
        return manifest if isinstance(manifest, bytes) else manifest.encode()
    data: dict[str, Any] = {"version": version} if version else {}
    return yaml.safe_dump(data, default_flow_style=False).encode()


def format_converted_manifest(k8s_manifest: str) -> str:
    """Split a Kubernetes ``List`` manifest into documents joined by ``---``.

    Anything other than a ``List`` yields an empty string.
    """
    manifest = yaml.safe_load(k8s_manifest)
    if manifest is None:
        return ""
    if not isinstance(manifest, dict):
        raise ValueError("manifest is not a mapping")
    if manifest.get("kind") != _LIST_KIND:
        return ""
    items = manifest.get("items") or []
    return "\n---\n".join(yaml.safe_dump(item, default_flow_style=False) for item in items)
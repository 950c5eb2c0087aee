import json

import pytest
import responses
import yaml

from meshkit.compose import (
    DEFAULT_DOCKER_COMPOSE_SCHEMA_URL,
    format_compose_file,
    format_converted_manifest,
    is_manifest_a_docker_compose,
    validate_compose,
    version_check,
)
from meshkit.errors import MeshKitError, error_code

SCHEMA = json.dumps(
    {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "services": {"type": "object"},
        },
        "additionalProperties": False,
    }
)

GOOD = b'version: "3.3"\nservices:\n  web:\n    image: nginx\n'
BAD = b"version: '3'\nnetworkz: {}\n"


def test_validate_compose_accepts_valid_file():
    assert validate_compose(GOOD, SCHEMA) is None


@pytest.mark.parametrize("manifest", [BAD, b"version: [unclosed"])
def test_validate_compose_rejects(manifest):
    with pytest.raises(MeshKitError) as info:
        validate_compose(manifest, SCHEMA)
    assert error_code(info.value) == "11084"


def test_validate_compose_rejects_bad_schema():
    with pytest.raises(MeshKitError) as info:
        validate_compose(GOOD, "{not json")
    assert error_code(info.value) == "11084"


def test_is_manifest_a_docker_compose_uses_default_schema():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.GET, DEFAULT_DOCKER_COMPOSE_SCHEMA_URL, body=SCHEMA, status=200)
        assert is_manifest_a_docker_compose(GOOD, "") is None
        with pytest.raises(MeshKitError) as info:
            is_manifest_a_docker_compose(BAD, "")
        assert error_code(info.value) == "11084"


def test_is_manifest_a_docker_compose_missing_schema():
    url = "https://schemas.example.com/compose.json"
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.GET, url, status=404)
        with pytest.raises(MeshKitError) as info:
            is_manifest_a_docker_compose(GOOD, url)
        assert error_code(info.value) == "11052"


@pytest.mark.parametrize("manifest", [b"version: '3.3'\n", b"version: 3.3\n", b"version: '2'\n"])
def test_version_check_accepts_compatible(manifest):
    assert version_check(manifest) is None


@pytest.mark.parametrize(
    "manifest, code",
    [
        (b"version: '3.8'\n", "11083"),
        (b"services: {}\n", "11077"),
        (b"", "11077"),
        (b"version: latest\n", "11079"),
        (b"- a\n- b\n", "11043"),
        (b"version: [oops", "11043"),
    ],
)
def test_version_check_errors(manifest, code):
    with pytest.raises(MeshKitError) as info:
        version_check(manifest)
    assert error_code(info.value) == code


def test_format_compose_file_keeps_version_as_string():
    out = format_compose_file(b"version: 3.3\nservices:\n  web: {}\n")
    assert yaml.safe_load(out) == {"version": "3.3"}


def test_format_compose_file_without_version():
    assert yaml.safe_load(format_compose_file(b"services: {}\n")) == {}


def test_format_compose_file_unparseable_is_unchanged():
    raw = b"version: [oops"
    assert format_compose_file(raw) == raw


def test_format_converted_manifest_splits_list():
    items = [
        {"apiVersion": "v1", "kind": "Service", "metadata": {"name": "web"}},
        {"apiVersion": "apps/v1", "kind": "Deployment", "metadata": {"name": "web"}},
    ]
    text = yaml.safe_dump({"apiVersion": "v1", "kind": "List", "items": items})
    result = format_converted_manifest(text)
    assert [yaml.safe_load(doc) for doc in result.split("\n---\n")] == items


def test_format_converted_manifest_non_list_is_empty():
    assert format_converted_manifest("kind: Service\n") == ""
    assert format_converted_manifest("") == ""


def test_format_converted_manifest_invalid_yaml():
    with pytest.raises(yaml.YAMLError):
        format_converted_manifest("kind: [oops")
import pytest

from meshkit import errors
from meshkit.errors import MeshKitError, Severity, error_code


@pytest.mark.parametrize(
    "factory, code",
    [
        (lambda: errors.err_cue_lookup(ValueError("x")), "11089"),
        (lambda: errors.err_unmarshal(ValueError("x")), "11043"),
        (lambda: errors.err_unmarshal_syntax(ValueError("x"), 3), "11045"),
        (lambda: errors.err_unmarshal_type(ValueError("x"), "k"), "11046"),
        (lambda: errors.err_marshal(ValueError("x")), "11049"),
        (lambda: errors.err_expected_type_mismatch(ValueError("x"), "float"), "11079"),
        (lambda: errors.err_missing_field(ValueError("x"), "name"), "11076"),
        (lambda: errors.err_get_bool("k", ValueError("x")), "11050"),
        (lambda: errors.err_remote_file_not_found("http://example.com/a"), "11052"),
        (lambda: errors.err_reading_remote_file(ValueError("x")), "11053"),
        (lambda: errors.err_reading_local_file(ValueError("x")), "11054"),
        (lambda: errors.err_getting_latest_release_tag(ValueError("x")), "11055"),
        (lambda: errors.err_get_all_helm_packages(ValueError("x")), "11095"),
        (lambda: errors.err_get_chart_url(ValueError("x")), "11092"),
        (lambda: errors.err_get_ah_package(ValueError("x")), "1093"),
        (lambda: errors.err_component_generate(ValueError("x")), "11094"),
        (lambda: errors.err_crd_generate(ValueError("x")), "11088"),
        (lambda: errors.err_get_definition(ValueError("x")), "11090"),
        (lambda: errors.err_get_schema(ValueError("x")), "11091"),
        (lambda: errors.err_update_schema(ValueError("x"), "obj"), "11092"),
        (lambda: errors.err_get_gh_package(ValueError("x")), "11096"),
        (lambda: errors.err_cvrt_kompose(ValueError("x")), "11075"),
        (lambda: errors.err_validate_docker_compose_file(ValueError("x")), "11084"),
        (errors.err_incompatible_version, "11083"),
        (errors.err_no_version, "11077"),
        (errors.err_invalid_protocol, "11051"),
        (errors.err_get_describer_func, "not set"),
    ],
)
def test_codes(factory, code):
    err = factory()
    assert error_code(err) == code


def test_error_code_of_plain_exception_is_none():
    assert error_code(ValueError("boom")) is None


def test_wrapped_error_text_is_long_description():
    cause = ValueError("bad json at line 2")
    err = errors.err_unmarshal(cause)
    assert err.long_description == ["bad json at line 2"]
    assert err.severity is Severity.ALERT


def test_str_joins_short_description():
    err = errors.err_remote_file_not_found("http://example.com/file")
    assert str(err) == "remote file not found at http://example.com/file"


def test_unmarshal_syntax_offset_in_short_description():
    err = errors.err_unmarshal_syntax(ValueError("x"), 42)
    assert err.short_description[1] == "42"


def test_describer_error_is_fatal_with_empty_hints():
    err = errors.err_get_describer_func()
    assert err.severity is Severity.FATAL
    assert err.probable_cause == []
    assert err.suggested_remediation == []
    assert len(err.long_description) == 2


def test_can_be_raised_and_caught():
    err = errors.err_no_version()
    assert err.short_description == ["version not found in the docker compose file"]
    assert err.long_description == ["Version field not found"]
    with pytest.raises(MeshKitError) as info:
        raise err
    assert info.value is err
    assert error_code(info.value) == "11077"


def test_factories_return_fresh_instances():
    assert errors.err_invalid_protocol() is not errors.err_invalid_protocol()
    assert str(errors.err_invalid_protocol()) == (
        "invalid protocol: only http, https and file are valid protocols"
    )
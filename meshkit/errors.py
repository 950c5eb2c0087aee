"""Structured errors carrying a code, a severity and remediation hints."""

from __future__ import annotations

import enum
from collections.abc import Iterable


class Severity(enum.IntEnum):
    """How serious an error is."""

    EMERGENCY = 0
    NONE = 1
    ALERT = 2
    CRITICAL = 3
    FATAL = 4


class MeshKitError(Exception):
    """An error with a code, a severity, descriptions and remediation hints."""

    def __init__(
        self,
        code: str,
        severity: Severity,
        short_description: Iterable[str] = (),
        long_description: Iterable[str] = (),
        probable_cause: Iterable[str] = (),
        suggested_remediation: Iterable[str] = (),
    ) -> None:
        self.code = code
        self.severity = severity
        self.short_description = list(short_description or ())
        self.long_description = list(long_description or ())
        self.probable_cause = list(probable_cause or ())
        self.suggested_remediation = list(suggested_remediation or ())
        super().__init__(str(self))

    def __str__(self) -> str:
        return " ".join(self.short_description)

    def __repr__(self) -> str:
        return f"MeshKitError(code={self.code!r}, severity={self.severity.name}, message={str(self)!r})"


def error_code(err: BaseException) -> str | None:
    """Return the code of a MeshKitError, or None for any other exception."""
    if isinstance(err, MeshKitError):
        return err.code
    return None


_ALERT = Severity.ALERT
_JSON_CAUSE = ["Invalid object format"]
_JSON_FIX = ["Make sure to input a valid JSON object"]
_FILE_CAUSE = ["File doesnt exist in the location", "File name is incorrect"]
_FILE_FIX = ["Make sure to input the right file name and location"]


def err_invalid_protocol() -> MeshKitError:
    return MeshKitError(
        "11051",
        _ALERT,
        ["invalid protocol: only http, https and file are valid protocols"],
        [],
        ["Network protocol is incorrect"],
        ["Make sure to specify the right network protocol"],
    )


def err_cue_lookup(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11089",
        _ALERT,
        ["Could not lookup the given path in the CUE value"],
        [str(err)],
        [""],
        [
            "make sure that the path is a valid cue expression and is correct",
            "make sure that there exists a field with the given path",
            "make sure that the given root value is correct",
        ],
    )


def err_unmarshal(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11043", _ALERT, ["Unmarshal unknown error: "], [str(err)], _JSON_CAUSE, _JSON_FIX
    )


def err_unmarshal_syntax(err: BaseException, offset: int) -> MeshKitError:
    return MeshKitError(
        "11045",
        _ALERT,
        ["Unmarshal syntax error at offest: ", str(int(offset))],
        [str(err)],
        _JSON_CAUSE,
        _JSON_FIX,
    )


def err_unmarshal_type(err: BaseException, value: str) -> MeshKitError:
    return MeshKitError(
        "11046",
        _ALERT,
        ["Unmarshal type error at key: ", value],
        [str(err)],
        _JSON_CAUSE,
        _JSON_FIX,
    )


def err_marshal(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11049", _ALERT, ["Marshal error, Description: "], [str(err)], _JSON_CAUSE, _JSON_FIX
    )


def err_expected_type_mismatch(err: BaseException, expected_type: str) -> MeshKitError:
    return MeshKitError(
        "11079",
        _ALERT,
        ["Expected the type to be: ", expected_type],
        [str(err)],
        ["Invalid manifest"],
        ["Make sure that the value provided in the manifest has the needed type."],
    )


def err_missing_field(err: BaseException, missing_field_name: str) -> MeshKitError:
    return MeshKitError(
        "11076",
        _ALERT,
        ["Missing field or property with name: ", missing_field_name],
        [str(err)],
        ["Invalid manifest"],
        ["Make sure that the concerned data type has all the required fields/values."],
    )


def err_get_bool(key: str, err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11050",
        _ALERT,
        ["Error while getting Boolean value for key: ", key],
        [str(err)],
        ["Not a valid boolean"],
        ["Make sure it is a boolean"],
    )


def err_remote_file_not_found(url: str) -> MeshKitError:
    return MeshKitError(
        "11052", _ALERT, ["remote file not found at", url], [], _FILE_CAUSE, _FILE_FIX
    )


def err_reading_remote_file(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11053", _ALERT, ["error reading remote file"], [str(err)], _FILE_CAUSE, _FILE_FIX
    )


def err_reading_local_file(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11054", _ALERT, ["error reading local file"], [str(err)], _FILE_CAUSE, _FILE_FIX
    )


def err_getting_latest_release_tag(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11055",
        _ALERT,
        ["Could not fetch latest stable release from github"],
        [str(err)],
        [
            "Failed to make GET request to github",
            "Invalid response received on github.com/<org>/<repo>/releases/stable",
        ],
        [
            "Make sure Github is reachable",
            "Make sure a valid response is available on github.com/<org>/<repo>/releases/stable",
        ],
    )


def err_get_all_helm_packages(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11095",
        _ALERT,
        ["Could not get HELM packages from Artifacthub"],
        [str(err)],
        [""],
        ["make sure that the artifacthub API service is available"],
    )


def err_get_chart_url(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11092",
        _ALERT,
        ["Could not get the chart url for this ArtifactHub package"],
        [str(err)],
        [""],
        ["make sure that the package exists"],
    )


def err_get_ah_package(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "1093",
        _ALERT,
        ["Could not get the ArtifactHub package with the given name"],
        [str(err)],
        [""],
        ["make sure that the package exists"],
    )


def err_component_generate(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11094",
        _ALERT,
        ["failed to generate components for the package"],
        [str(err)],
        [],
        ["Make sure that the package is compatible"],
    )


def err_crd_generate(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11088",
        _ALERT,
        ["Could not generate component with the given CRD"],
        [str(err)],
        [""],
        ["Verify CRD has valid schema."],
    )


def err_get_definition(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11090",
        _ALERT,
        ["Could not get definition for the given CRD"],
        [str(err)],
        [""],
        ["Verify CRD has valid schema."],
    )


def err_get_schema(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11091",
        _ALERT,
        ["Could not get schema for the given CRD"],
        [str(err)],
        ["Unable to marshal from cue value to JSON", "Unable to unmarshal from JSON to Go type"],
        [
            "Verify CRD has valid schema.",
            "Malformed JSON provided",
            "CUE path to propery doesn't exist",
        ],
    )


def err_update_schema(err: BaseException, obj: str) -> MeshKitError:
    return MeshKitError(
        "11092",
        _ALERT,
        ["Failed to update schema properties for ", obj],
        [str(err)],
        [
            "Incorrect type assertion",
            "Selector.Unquoted might have been invoked on non-string label",
            "error during conversion from cue.Selector to string",
        ],
        [
            "Ensure correct type assertion",
            "Perform appropriate conversion from cue.Selector to string",
            "Verify CRD has valid schema",
        ],
    )


def err_get_gh_package(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11096",
        _ALERT,
        ["Could not get the Github package with the given name"],
        [str(err)],
        [
            "Github could be unreachable",
            "passed version could be invalid",
            "passed filename could be invalid",
        ],
        ["make sure that the package exists", "make sure version or filename passed is correct"],
    )


def err_cvrt_kompose(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11075",
        _ALERT,
        ["Error converting the docker compose file into kubernetes manifests"],
        [str(err)],
        ["Could not convert docker-compose file into kubernetes manifests"],
        ["Make sure the docker-compose file is valid", ""],
    )


def err_validate_docker_compose_file(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11084",
        _ALERT,
        ["Invalid docker compose file"],
        [str(err)],
        [""],
        ["Make sure that the compose file is valid,", "Make sure that the schema is valid"],
    )


def err_incompatible_version() -> MeshKitError:
    return MeshKitError(
        "11083",
        _ALERT,
        ["This version of docker compose file is not compatible."],
        ["This docker compose file is invalid since it's version is incompatible."],
        ["docker compose file with version greater than 3.3 is probably being used"],
        ["Make sure that the compose file has version less than or equal to 3.3,", ""],
    )


def err_no_version() -> MeshKitError:
    return MeshKitError(
        "11077",
        _ALERT,
        ["version not found in the docker compose file"],
        ["Version field not found"],
        [
            "Since the Docker Compose specification does not mandate the version field "
            "from version 3 onwards, most sources do not provide them."
        ],
        [
            "Make sure that the compose file has version specified,",
            "Add any version less than or equal to 3.3 if you cannot get the exact version from the source",
        ],
    )


def err_get_describer_func() -> MeshKitError:
    return MeshKitError(
        "not set",
        Severity.FATAL,
        ["Failed to get describer for the resource"],
        [
            "invalid kubernetes object type or object type not supported in meshkit",
            "Describer not found for the defined Resource",
        ],
        None,
        None,
    )
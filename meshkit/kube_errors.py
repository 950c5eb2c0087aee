"""Errors raised by the Kubernetes helpers."""

from __future__ import annotations

from meshkit.errors import MeshKitError, Severity

_ALERT = Severity.ALERT
_KUBECONFIG_CAUSE = ["Kubernetes config is not accessible to meshery or not valid"]
_KUBECONFIG_FIX = [
    "Upload your kubernetes config via the settings dashboard. "
    "If uploaded, wait for a minute for it to get initialized"
]


def err_apply_manifest(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11021",
        _ALERT,
        ["Error Applying manifest"],
        [str(err)],
        ["Manifest could be invalid"],
        ["Make sure manifest yaml is valid"],
    )


def err_service_discovery(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11022",
        _ALERT,
        ["Error Discovering service"],
        [str(err)],
        ["Network not reachable to the service"],
        ["Make sure the endpoint is reachable"],
    )


def err_apply_helm_chart(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11023",
        _ALERT,
        ["Error applying helm chart"],
        [str(err)],
        ["Chart could be invalid"],
        ["Make sure to apply valid chart"],
    )


def err_new_kube_client(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11024",
        _ALERT,
        ["Error creating kubernetes clientset"],
        [str(err)],
        _KUBECONFIG_CAUSE,
        _KUBECONFIG_FIX,
    )


def err_new_dyn_client(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11025",
        _ALERT,
        ["Error creating dynamic client"],
        [str(err)],
        _KUBECONFIG_CAUSE,
        _KUBECONFIG_FIX,
    )


def err_new_discovery(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11026",
        _ALERT,
        ["Error creating discovery client"],
        [str(err)],
        ["Discovery resource is invalid or doesnt exist"],
        ["Makes sure the you input valid resource for discovery"],
    )


def err_new_informer(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11027",
        _ALERT,
        ["Error creating informer client"],
        [str(err)],
        ["Informer is invalid or doesnt exist"],
        ["Makes sure the you input valid resource for the informer"],
    )


def err_load_config(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11030",
        _ALERT,
        ["Error loading kubernetes config"],
        [str(err)],
        _KUBECONFIG_CAUSE,
        _KUBECONFIG_FIX,
    )


def err_validate_config(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11031",
        _ALERT,
        ["Validation failed in the kubernetes config"],
        [str(err)],
        _KUBECONFIG_CAUSE,
        _KUBECONFIG_FIX,
    )


def err_creating_helm_index(err: BaseException) -> MeshKitError:
    return MeshKitError("11032", _ALERT, ["Error while creating Helm Index"], [str(err)], [], [])


def err_entry_with_app_version_not_exists(entry: str, app_version: str) -> MeshKitError:
    return MeshKitError(
        "11033",
        _ALERT,
        ["Entry for the app version does not exist"],
        [f"entry {entry} with app version {app_version} does not exists"],
        [],
        [],
    )


def err_entry_with_chart_version_not_exists(entry: str, chart_version: str) -> MeshKitError:
    return MeshKitError(
        "11036",
        _ALERT,
        ["Entry for the chart version does not exist"],
        [f"entry {entry} with chart version {chart_version} does not exists"],
        [],
        [],
    )


def err_helm_repository_not_found(repo: str, err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11034",
        _ALERT,
        ["Helm repo not found"],
        [f"either the repo {repo} does not exists or is corrupt: {err}"],
        [],
        [],
    )


def err_decode_yaml(err: BaseException) -> MeshKitError:
    return MeshKitError(
        "11035", _ALERT, ["Error occurred while decoding YAML"], [str(err)], [], []
    )


def err_endpoint_not_found() -> MeshKitError:
    return MeshKitError("11028", _ALERT, ["Unable to discover an endpoint"], [], [], [])


def err_invalid_api_server() -> MeshKitError:
    return MeshKitError("11029", _ALERT, ["Invalid API Server URL"], [], [], [])
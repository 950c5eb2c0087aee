"""Errors raised while exposing Kubernetes resources through services."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from meshkit.errors import MeshKitError, Severity

_ALERT = Severity.ALERT


def _simple(code: str, *short: str) -> MeshKitError:
    return MeshKitError(code, _ALERT, list(short), [], [], [])


def _group_kind(group: str, kind: str) -> str:
    return kind if not group else f"{kind}.{group}"


def err_pod_has_no_labels() -> MeshKitError:
    return _simple("11058", "the pod has no labels and cannot be exposed")


def err_service_has_no_selectors() -> MeshKitError:
    return _simple("11059", "the service has no pod selector set")


def err_invalid_deployment_no_selectors_labels() -> MeshKitError:
    return _simple("11060", "the deployment has no labels or selectors and cannot be exposed")


def err_invalid_deployment_no_selectors() -> MeshKitError:
    return _simple("11061", "invalid deployment: no selectors, therefore cannot be exposed")


def err_invalid_replica_no_selectors_labels() -> MeshKitError:
    return _simple("11062", "the replica set has no labels or selectors and cannot be exposed")


def err_invalid_replica_set_no_selectors() -> MeshKitError:
    return _simple("11063", "invalid replicaset: no selectors, therefore cannot be exposed")


def err_no_ports_found_for_headless_resource() -> MeshKitError:
    return _simple("11064", "no ports found for the non headless resource")


def err_unknown_session_affinity(session_affinity: str) -> MeshKitError:
    return _simple("11065", "unknown session affinity:", str(session_affinity))


def err_match_expressions_convertion(expressions: Iterable[Any]) -> MeshKitError:
    return _simple("11066", "couldn't convert expressions - to map-based selector format")


def err_failed_to_extract_pod_selector(kind: str) -> MeshKitError:
    return _simple("11067", "cannot extract pod selector from ", kind)


def err_failed_to_extract_ports(kind: str) -> MeshKitError:
    return _simple("11068", "cannot extract ports from ", kind)


def err_failed_to_extract_protocols(kind: str) -> MeshKitError:
    return _simple("11069", "cannot extract protocols from ", kind)


def err_cannot_expose_object(group: str, kind: str) -> MeshKitError:
    return _simple("11070", "cannot expose a ", _group_kind(group, kind))


def err_expose_resource(err: BaseException) -> MeshKitError:
    return _simple("11032", str(err))


def err_getting_resource(err: BaseException) -> MeshKitError:
    return _simple("11033", str(err))


def err_traverser(err: BaseException) -> MeshKitError:
    return _simple("11034", str(err))


def err_resource_cannot_be_exposed(err: BaseException, resource_kind: str) -> MeshKitError:
    return MeshKitError(
        "11035",
        _ALERT,
        ["resource type cannot be exposed: ", resource_kind],
        [str(err)],
        [],
        [],
    )


def err_selector_based_map(err: BaseException) -> MeshKitError:
    return _simple("11036", str(err))


def err_protocol_based_map(err: BaseException) -> MeshKitError:
    return _simple("11037", str(err))


def err_label_based_map(err: BaseException) -> MeshKitError:
    return _simple("11038", str(err))


def err_port_parsing(err: BaseException) -> MeshKitError:
    return _simple("11039", str(err))


def err_generate_service(err: BaseException) -> MeshKitError:
    return _simple("11040", str(err))


def err_constructing_rest_helper(err: BaseException) -> MeshKitError:
    return _simple("11041", str(err))


def err_creating_service(err: BaseException) -> MeshKitError:
    return _simple("11042", str(err))
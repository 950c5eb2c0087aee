"""Build Kubernetes services that expose existing workloads."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from meshkit.expose_errors import (
    err_cannot_expose_object,
    err_failed_to_extract_pod_selector,
    err_failed_to_extract_ports,
    err_failed_to_extract_protocols,
    err_generate_service,
    err_invalid_deployment_no_selectors,
    err_invalid_deployment_no_selectors_labels,
    err_invalid_replica_no_selectors_labels,
    err_invalid_replica_set_no_selectors,
    err_label_based_map,
    err_match_expressions_convertion,
    err_no_ports_found_for_headless_resource,
    err_pod_has_no_labels,
    err_port_parsing,
    err_protocol_based_map,
    err_resource_cannot_be_exposed,
    err_selector_based_map,
    err_service_has_no_selectors,
    err_unknown_session_affinity,
)

log = logging.getLogger(__name__)

DNS1035_LABEL_MAX_LENGTH = 63
_DEFAULT_PROTOCOL = "TCP"


class SessionAffinity(str, enum.Enum):
    """Session affinity of a service."""

    NONE = "None"
    CLIENT_IP = "ClientIP"


class ServiceType(str, enum.Enum):
    """Supported service types."""

    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"


@dataclass
class ExposeConfig:
    """How the generated service should look.

    An empty ``type`` leaves the type to the cluster default (ClusterIP). An
    empty ``namespace`` means the namespace of the exposed resource.
    """

    type: ServiceType | str = ""
    load_balancer_ip: str = ""
    cluster_ip: str = ""
    namespace: str = ""
    session_affinity: SessionAffinity | str = ""
    name: str = ""
    annotations: dict[str, str] = field(default_factory=dict)


_CORE_POD = ("", "v1", "Pod")
_CORE_SERVICE = ("", "v1", "Service")
_CORE_RC = ("", "v1", "ReplicationController")
_EXT_DEPLOYMENT = ("extensions", "v1beta1", "Deployment")
_EXT_REPLICASET = ("extensions", "v1beta1", "ReplicaSet")
_APPS_DEPLOYMENTS = {
    ("apps", "v1", "Deployment"),
    ("apps", "v1beta2", "Deployment"),
    ("apps", "v1beta1", "Deployment"),
}
_APPS_REPLICASETS = {
    ("apps", "v1", "ReplicaSet"),
    ("apps", "v1beta2", "ReplicaSet"),
}
_TEMPLATED = {_CORE_RC, _EXT_DEPLOYMENT, _EXT_REPLICASET} | _APPS_DEPLOYMENTS | _APPS_REPLICASETS

_EXPOSABLE = {
    ("", "ReplicationController"),
    ("", "Service"),
    ("", "Pod"),
    ("apps", "Deployment"),
    ("apps", "ReplicaSet"),
    ("extensions", "Deployment"),
    ("extensions", "ReplicaSet"),
}


def _text(value: Any) -> str:
    return value.value if isinstance(value, enum.Enum) else str(value or "")


def _get(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, Mapping):
            return None
        data = data.get(key)
    return data


def _identity(obj: Mapping[str, Any]) -> tuple[str, str, str]:
    group, _, version = str(obj.get("apiVersion") or "").rpartition("/")
    return group, version, str(obj.get("kind") or "")


def _pod_spec(obj: Mapping[str, Any]) -> Mapping[str, Any] | None:
    ident = _identity(obj)
    if ident == _CORE_POD:
        return _get(obj, "spec") or {}
    if ident in _TEMPLATED:
        return _get(obj, "spec", "template", "spec") or {}
    return None


def can_be_exposed(group: str, kind: str) -> None:
    """Raise unless resources of this group and kind can be exposed."""
    if (group, kind) not in _EXPOSABLE:
        raise err_cannot_expose_object(group, kind)


def _apps_selector(obj: Mapping[str, Any], missing: Any) -> dict[str, str]:
    selector = _get(obj, "spec", "selector")
    match_labels = _get(selector, "matchLabels")
    if selector is None or not match_labels:
        raise missing
    if _get(selector, "matchExpressions"):
        raise err_match_expressions_convertion(selector["matchExpressions"])
    return dict(match_labels)


def _extensions_selector(obj: Mapping[str, Any], missing: Any) -> dict[str, str]:
    selector = _get(obj, "spec", "selector")
    if selector is not None:
        if _get(selector, "matchExpressions"):
            raise err_match_expressions_convertion(selector["matchExpressions"])
        labels = _get(selector, "matchLabels")
    else:
        labels = _get(obj, "spec", "template", "metadata", "labels")
    if not labels:
        raise missing
    return dict(labels)


def map_based_selector_for_object(obj: Mapping[str, Any]) -> dict[str, str]:
    """Return the map-based pod selector of ``obj``."""
    ident = _identity(obj)
    if ident == _CORE_RC:
        return dict(_get(obj, "spec", "selector") or {})
    if ident == _CORE_POD:
        labels = _get(obj, "metadata", "labels")
        if not labels:
            raise err_pod_has_no_labels()
        return dict(labels)
    if ident == _CORE_SERVICE:
        selector = _get(obj, "spec", "selector")
        if selector is None:
            raise err_service_has_no_selectors()
        return dict(selector)
    if ident == _EXT_DEPLOYMENT:
        return _extensions_selector(obj, err_invalid_deployment_no_selectors_labels())
    if ident in _APPS_DEPLOYMENTS:
        return _apps_selector(obj, err_invalid_deployment_no_selectors())
    if ident == _EXT_REPLICASET:
        return _extensions_selector(obj, err_invalid_replica_no_selectors_labels())
    if ident in _APPS_REPLICASETS:
        return _apps_selector(obj, err_invalid_replica_set_no_selectors())
    raise err_failed_to_extract_pod_selector(ident[2])


def _container_ports(pod_spec: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    for container in pod_spec.get("containers") or []:
        yield from container.get("ports") or []


def protocols_for_object(obj: Mapping[str, Any]) -> dict[str, str]:
    """Map each exposed port of ``obj`` (as a string) to its protocol."""
    if _identity(obj) == _CORE_SERVICE:
        return {
            str(int(port.get("port") or 0)): port.get("protocol") or _DEFAULT_PROTOCOL
            for port in _get(obj, "spec", "ports") or []
        }
    pod_spec = _pod_spec(obj)
    if pod_spec is None:
        raise err_failed_to_extract_protocols(_identity(obj)[2])
    return {
        str(int(port.get("containerPort") or 0)): port.get("protocol") or _DEFAULT_PROTOCOL
        for port in _container_ports(pod_spec)
    }


def ports_for_object(obj: Mapping[str, Any]) -> list[str]:
    """List the ports of ``obj`` as strings, in declaration order."""
    if _identity(obj) == _CORE_SERVICE:
        return [str(int(port.get("port") or 0)) for port in _get(obj, "spec", "ports") or []]
    pod_spec = _pod_spec(obj)
    if pod_spec is None:
        raise err_failed_to_extract_ports(_identity(obj)[2])
    return [str(int(port.get("containerPort") or 0)) for port in _container_ports(pod_spec)]


def generate_service(
    config: ExposeConfig,
    selectors: Mapping[str, str],
    labels: Mapping[str, str],
    protocols: Mapping[str, str],
    ports: list[str],
) -> dict[str, Any]:
    """Build a Service manifest from the given selectors, labels and ports."""
    service_ports = []
    for index, port in enumerate(ports, start=1):
        try:
            number = int(port)
        except ValueError:
            raise ValueError(f"invalid port {port!r}") from None
        entry: dict[str, Any] = {}
        if len(ports) > 1:
            entry["name"] = f"port-{index}"
        entry["port"] = number
        entry["protocol"] = protocols.get(port, _DEFAULT_PROTOCOL)
        entry["targetPort"] = number
        service_ports.append(entry)

    metadata: dict[str, Any] = {}
    if config.name:
        metadata["name"] = config.name
    if config.namespace:
        metadata["namespace"] = config.namespace
    if labels:
        metadata["labels"] = dict(labels)
    if config.annotations:
        metadata["annotations"] = dict(config.annotations)

    spec: dict[str, Any] = {}
    if selectors:
        spec["selector"] = dict(selectors)
    if service_ports:
        spec["ports"] = service_ports

    service_type = _text(config.type)
    if service_type:
        spec["type"] = service_type
    if service_type == ServiceType.LOAD_BALANCER.value and config.load_balancer_ip:
        spec["loadBalancerIP"] = config.load_balancer_ip

    affinity = _text(config.session_affinity)
    if affinity:
        try:
            spec["sessionAffinity"] = SessionAffinity(affinity).value
        except ValueError:
            raise err_unknown_session_affinity(affinity) from None

    if config.cluster_ip:
        spec["clusterIP"] = config.cluster_ip

    return {"apiVersion": "v1", "kind": "Service", "metadata": metadata, "spec": spec}


def build_service(obj: Mapping[str, Any], config: ExposeConfig) -> dict[str, Any]:
    """Build the Service manifest that exposes ``obj`` according to ``config``."""
    namespace = config.namespace or _get(obj, "metadata", "namespace") or ""
    group, _, kind = _identity(obj)
    try:
        can_be_exposed(group, kind)
    except Exception as exc:
        raise err_resource_cannot_be_exposed(exc, kind) from exc

    name = config.name[:DNS1035_LABEL_MAX_LENGTH]

    try:
        selectors = map_based_selector_for_object(obj)
    except Exception as exc:
        raise err_selector_based_map(exc) from exc

    headless = config.cluster_ip == "None"

    try:
        protocols = protocols_for_object(obj)
    except Exception as exc:
        raise err_protocol_based_map(exc) from exc

    labels = _get(obj, "metadata", "labels")
    if labels is not None and not isinstance(labels, Mapping):
        raise err_label_based_map(TypeError("metadata.labels is not a mapping"))

    try:
        ports = ports_for_object(obj)
    except Exception as exc:
        raise err_port_parsing(exc) from exc
    if not ports and not headless:
        raise err_port_parsing(err_no_ports_found_for_headless_resource())

    effective = ExposeConfig(
        type=config.type,
        load_balancer_ip=config.load_balancer_ip,
        cluster_ip=config.cluster_ip,
        namespace=namespace,
        session_affinity=config.session_affinity,
        name=name,
        annotations=dict(config.annotations),
    )
    try:
        service = generate_service(effective, selectors, labels or {}, protocols, ports)
    except Exception as exc:
        raise err_generate_service(exc) from exc
    log.debug("Generated service object %s in namespace %s", name, namespace)
    return service
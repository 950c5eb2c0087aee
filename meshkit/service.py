"""Discover reachable endpoints of Kubernetes services."""

from __future__ import annotations

import socket
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlsplit

from meshkit.kube_errors import (
    err_endpoint_not_found,
    err_invalid_api_server,
    err_service_discovery,
)

_DIAL_TIMEOUT = 2.0


@dataclass
class HostPort:
    """An address and a port."""

    address: str = ""
    port: int = 0

    def __str__(self) -> str:
        host = f"[{self.address}]" if ":" in self.address else self.address
        return f"{host}:{self.port}"


@dataclass
class Endpoint:
    """Internal (cluster) and external endpoints of a service."""

    internal: HostPort | None = None
    external: HostPort | None = None


@dataclass
class MockOptions:
    """Replaces real TCP checks: only ``desired_endpoint`` is reachable."""

    desired_endpoint: str = ""


@dataclass
class ServicePort:
    name: str = ""
    port: int = 0
    node_port: int = 0


@dataclass
class LoadBalancerIngress:
    ip: str = ""
    hostname: str = ""


@dataclass
class Service:
    """The parts of a Kubernetes service needed to find its endpoints."""

    name: str = ""
    namespace: str = ""
    cluster_ip: str = ""
    ports: list[ServicePort] = field(default_factory=list)
    type: str = "ClusterIP"
    ingress: list[LoadBalancerIngress] = field(default_factory=list)


@dataclass
class ServiceOptions:
    """Which service to discover and which of its ports to use."""

    name: str = ""
    namespace: str = ""
    port_selector: str = ""
    api_server_url: str = ""
    worker_node_ip: str = ""
    mock: MockOptions | None = None


class _ServiceClient(Protocol):
    def get_service(self, namespace: str, name: str) -> Service: ...


def tcp_check(host_port: HostPort, mock: MockOptions | None = None) -> bool:
    """Return whether a TCP connection to ``host_port`` can be opened."""
    if mock is not None:
        return mock.desired_endpoint == str(host_port)
    try:
        with socket.create_connection((host_port.address, host_port.port), timeout=_DIAL_TIMEOUT):
            return True
    except (OSError, ValueError):
        return False


def _api_server_host(url: str) -> str:
    """Extract the host of an API server URL that must carry a port."""
    try:
        netloc = urlsplit(url).netloc
    except ValueError:
        raise err_invalid_api_server() from None
    netloc = netloc.rpartition("@")[2]
    if netloc.startswith("["):
        end = netloc.find("]")
        if end < 0 or netloc[end + 1 : end + 2] != ":":
            raise err_invalid_api_server()
        return netloc[1:end]
    host, sep, _ = netloc.rpartition(":")
    if not sep or ":" in host:
        raise err_invalid_api_server()
    return host


def get_endpoint(opts: ServiceOptions, service: Service) -> Endpoint:
    """Work out the internal and external endpoints of ``service``."""
    worker_node_ip = opts.worker_node_ip or "localhost"
    node_port = cluster_port = 0
    for port in service.ports:
        node_port, cluster_port = port.node_port, port.port
        if opts.port_selector and port.name == opts.port_selector:
            break

    internal = HostPort(service.cluster_ip, cluster_port)
    external = HostPort(worker_node_ip, node_port)

    if service.ingress and (service.ingress[0].ip or service.ingress[0].hostname):
        ingress = service.ingress[0]
        if not ingress.ip:
            external = HostPort(ingress.hostname, cluster_port)
        elif ingress.ip in (service.cluster_ip, "<pending>"):
            if opts.api_server_url:
                external = HostPort(_api_server_host(opts.api_server_url), node_port)
            else:
                external = HostPort(service.cluster_ip, cluster_port)
        else:
            external = HostPort(ingress.ip, cluster_port)

    if external.port == 0:
        return Endpoint(internal=internal)

    if not tcp_check(external, opts.mock) and external.address != "localhost":
        # Fall back to the API server host, as on minikube clusters.
        external.address = _api_server_host(opts.api_server_url)
        if not tcp_check(external, opts.mock) and external.address != "localhost":
            external.port = node_port
            if not tcp_check(external, opts.mock):
                raise err_endpoint_not_found()

    return Endpoint(internal=internal, external=external)


def get_service_endpoint(client: _ServiceClient, opts: ServiceOptions) -> Endpoint:
    """Fetch the service named in ``opts`` through ``client`` and find its endpoint."""
    try:
        service = client.get_service(opts.namespace, opts.name)
    except Exception as exc:
        raise err_service_discovery(exc) from exc
    return get_endpoint(opts, service)
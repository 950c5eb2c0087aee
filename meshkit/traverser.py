"""Walk a list of Kubernetes resources and hand each one to a callback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from meshkit.errors import MeshKitError
from meshkit.expose_errors import err_getting_resource, err_traverser

log = logging.getLogger(__name__)

# The API version set on each fetched object, since clients tend to omit it.
_API_VERSIONS = {
    "Service": "v1",
    "Pod": "v1",
    "ReplicationController": "v1",
    "Deployment": "apps/v1",
    "ReplicaSet": "apps/v1",
}

VisitCallback = Callable[[dict[str, Any], "Exception | None"], "dict[str, Any] | None"]


class _ResourceClient(Protocol):
    def get(self, kind: str, namespace: str, name: str) -> Mapping[str, Any]: ...


@dataclass
class Resource:
    """Where to find a Kubernetes resource."""

    namespace: str = ""
    type: str = ""
    name: str = ""


def combine_errors(errors: Iterable[BaseException], sep: str = "\n") -> Exception | None:
    """Merge errors into one whose message joins theirs with ``sep``."""
    messages = [str(error) for error in errors]
    if not messages:
        return None
    return Exception(sep.join(messages))


def _with_services(error: MeshKitError, services: list[dict[str, Any]]) -> MeshKitError:
    error.services = list(services)
    return error


@dataclass
class Traverser:
    """Fetches each resource through ``client`` and passes it to a callback.

    On failure the raised error carries the services gathered so far in its
    ``services`` attribute.
    """

    client: _ResourceClient
    resources: list[Resource] = field(default_factory=list)

    def visit(
        self, callback: VisitCallback, continue_on_error: bool = True
    ) -> list[dict[str, Any]]:
        """Visit every resource and collect the services the callback returns."""
        errors: list[Exception] = []
        services: list[dict[str, Any]] = []

        for resource in self.resources:
            api_version = _API_VERSIONS.get(resource.type)
            if api_version is None:
                log.warning("invalid resource type %r", resource.type)
                continue

            fetch_error: Exception | None = None
            try:
                obj = dict(self.client.get(resource.type, resource.namespace, resource.name) or {})
            except Exception as exc:
                log.error("%s", exc)
                errors.append(exc)
                if not continue_on_error:
                    raise _with_services(err_getting_resource(exc), services) from exc
                obj = {}
                fetch_error = exc

            obj["kind"] = resource.type
            obj["apiVersion"] = api_version

            try:
                service = callback(obj, fetch_error)
            except Exception as exc:
                log.error("%s", exc)
                errors.append(exc)
                if not continue_on_error:
                    raise _with_services(err_getting_resource(exc), services) from exc
                service = None

            if service is not None:
                services.append(service)

        combined = combine_errors(errors, "\n")
        if combined is not None:
            raise _with_services(err_traverser(combined), services)
        return services
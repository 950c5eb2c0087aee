# meshkit

Building blocks for tools that manage service meshes on Kubernetes.

## Modules

- **`meshkit.errors`**, **`meshkit.kube_errors`**, **`meshkit.expose_errors`**:
  `MeshKitError` is an exception with a `code`, a `Severity`, a short description,
  a long description, probable causes and suggested remediation. The `err_*`
  functions build the errors the package raises. `error_code(err)` returns the
  code of a `MeshKitError`, or `None` for any other exception.
- **`meshkit.service`**: `get_endpoint(opts, service)` works out the internal
  (cluster IP) and external (node port, load balancer ingress or API-server host)
  endpoints of a `Service`. `get_service_endpoint(client, opts)` first fetches the
  service through any object with a `get_service(namespace, name)` method.
  `tcp_check(host_port, mock)` opens a TCP connection to test reachability; with
  `MockOptions` it only reports `desired_endpoint` as reachable.
- **`meshkit.kubeconfig`**: `kubeconfig_path()` returns `$KUBECONFIG` if set,
  otherwise `~/.kube/config`. `get_kube_config(path)` parses that YAML file into a
  dict and `get_current_context(path)` returns its `current-context`.
- **`meshkit.expose`**: from a workload manifest (a dict for a Pod, Service,
  ReplicationController, Deployment or ReplicaSet) work out selectors
  (`map_based_selector_for_object`), ports (`ports_for_object`) and protocols
  (`protocols_for_object`), and build a Service manifest with
  `build_service(obj, config)` or `generate_service(...)`, configured by
  `ExposeConfig`, `ServiceType` and `SessionAffinity`.
- **`meshkit.traverser`**: `Traverser(client, resources).visit(callback)` fetches each
  `Resource` through `client.get(kind, namespace, name)`, passes it to the callback and
  collects the services the callback returns. Errors are gathered with
  `combine_errors` and raised at the end; the raised error carries the services
  collected so far in its `services` attribute.
- **`meshkit.artifacthub`**: `get_ah_packages_with_name(name)` searches Artifact Hub
  for Helm packages, `AhPackage.update_package_data()` fills in `chart_url` from the
  repository's `index.yaml`, `sort_packages_with_score(pkgs)` ranks verified and
  official packages first, and `get_all_ah_helm_packages(delay)` lists every Helm
  package, pausing between requests.
- **`meshkit.compose`**: `validate_compose(manifest, schema)` checks a compose file
  against a JSON schema; `is_manifest_a_docker_compose(manifest, schema_url)` fetches
  the schema first. `version_check(manifest)` requires a version of 3.3 or lower.
  `format_compose_file` and `format_converted_manifest` normalise compose files and
  split a Kubernetes `List` manifest into `---`-separated documents.
- **`meshkit.broadcast`**: `Broadcaster` delivers each `BroadcastMessage` to every
  registered channel (any object with `put`, such as `queue.Queue`). It is a context
  manager.
- **`meshkit.events`**: `EventStreamer.publish(item)` hands an item to every subscribed
  channel on background threads.
- **`meshkit.describe`**: `DescribeType`, `GroupKind`, `DescriberOptions` and
  `group_kind_for(describe_type)`, which maps a resource type to its API group and kind.
- **`meshkit.gitversion`**: `git(path)` returns `(version, commit_head)` read from a CSV
  version file, or empty strings if it cannot be read.

## Example

```python
from meshkit.service import (
    LoadBalancerIngress, MockOptions, Service, ServiceOptions, ServicePort, get_endpoint,
)

svc = Service(
    name="web",
    namespace="default",
    cluster_ip="1.1.1.1",
    ports=[ServicePort(name="http", port=1000, node_port=2000)],
    ingress=[LoadBalancerIngress(ip="10.10.10.10")],
)
opts = ServiceOptions(
    port_selector="http",
    mock=MockOptions(desired_endpoint="10.10.10.10:1000"),
)
endpoint = get_endpoint(opts, svc)
print(endpoint.external)  # 10.10.10.10:1000
print(endpoint.internal)  # 1.1.1.1:1000
```

## What it does not do

meshkit does not talk to a Kubernetes cluster itself: it has no API client, does not
apply, create or delete manifests, and `build_service` only returns a Service manifest.
It does not convert compose files into Kubernetes manifests, does not render a
description of a resource (`meshkit.describe` only maps types to group and kind), and
does not download Helm charts or generate components from their CRDs.

## Installing and testing

```
pip install meshkit
pip install "meshkit[test]"
pytest
```
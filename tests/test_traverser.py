import pytest

from meshkit.errors import MeshKitError, error_code
from meshkit.traverser import Resource, Traverser, combine_errors


class FakeClient:
    def __init__(self, objects):
        self.objects = objects
        self.calls = []

    def get(self, kind, namespace, name):
        self.calls.append((kind, namespace, name))
        try:
            return self.objects[(kind, namespace, name)]
        except KeyError:
            raise LookupError(f"{kind} {namespace}/{name} not found") from None


def echo(obj, err):
    if err is not None:
        return None
    return {"from": obj["kind"], "apiVersion": obj["apiVersion"], "meta": obj.get("metadata")}


def test_visit_sets_kind_and_api_version():
    client = FakeClient(
        {
            ("Service", "default", "web"): {"metadata": {"name": "web"}},
            ("Deployment", "default", "api"): {"metadata": {"name": "api"}},
        }
    )
    traverser = Traverser(
        client=client,
        resources=[Resource("default", "Service", "web"), Resource("default", "Deployment", "api")],
    )
    services = traverser.visit(echo)
    assert services == [
        {"from": "Service", "apiVersion": "v1", "meta": {"name": "web"}},
        {"from": "Deployment", "apiVersion": "apps/v1", "meta": {"name": "api"}},
    ]


def test_unknown_type_is_skipped():
    client = FakeClient({("Pod", "ns", "p"): {}})
    traverser = Traverser(
        client=client, resources=[Resource("ns", "Widget", "w"), Resource("ns", "Pod", "p")]
    )
    services = traverser.visit(echo)
    assert client.calls == [("Pod", "ns", "p")]
    assert [s["from"] for s in services] == ["Pod"]


def test_fetch_error_continues_and_raises_traverser_error():
    client = FakeClient({("ReplicaSet", "ns", "ok"): {}})
    seen = []

    def callback(obj, err):
        seen.append((obj["kind"], err is not None))
        return echo(obj, err)

    traverser = Traverser(
        client=client,
        resources=[Resource("ns", "ReplicaSet", "missing"), Resource("ns", "ReplicaSet", "ok")],
    )
    with pytest.raises(MeshKitError) as info:
        traverser.visit(callback, True)
    assert error_code(info.value) == "11034"
    assert "ReplicaSet ns/missing not found" in str(info.value)
    assert seen == [("ReplicaSet", True), ("ReplicaSet", False)]
    assert [s["from"] for s in info.value.services] == ["ReplicaSet"]


def test_fetch_error_stops_without_continue():
    client = FakeClient({("Pod", "ns", "ok"): {}})
    traverser = Traverser(
        client=client, resources=[Resource("ns", "Pod", "ok"), Resource("ns", "Pod", "gone")]
    )
    with pytest.raises(MeshKitError) as info:
        traverser.visit(echo, False)
    assert error_code(info.value) == "11033"
    assert len(info.value.services) == 1


def test_callback_error_is_collected():
    client = FakeClient({("Service", "a", "x"): {}, ("Service", "a", "y"): {}})

    def failing(obj, err):
        raise ValueError("cannot expose")

    traverser = Traverser(
        client=client, resources=[Resource("a", "Service", "x"), Resource("a", "Service", "y")]
    )
    with pytest.raises(MeshKitError) as info:
        traverser.visit(failing)
    assert str(info.value) == "cannot expose\ncannot expose"
    assert info.value.services == []


def test_combine_errors():
    assert combine_errors([]) is None
    combined = combine_errors([ValueError("a"), KeyError("b") and RuntimeError("b")], ", ")
    assert str(combined) == "a, b"
import queue

import pytest

from meshkit.broadcast import BroadcastMessage, BroadcastSource, Broadcaster


def test_default_source_value():
    message = BroadcastMessage()
    assert message.source.value == "urn:meshery:operator:sync"


def test_message_delivered_to_all_listeners():
    first, second = queue.Queue(), queue.Queue()
    message = BroadcastMessage(type="sync", data={"k": 1})
    with Broadcaster(4) as b:
        b.register(first)
        b.register(second)
        b.submit(message)
        assert first.get(timeout=2) == message
        assert second.get(timeout=2) == message


def test_unregistered_listener_receives_nothing():
    kept, dropped = queue.Queue(), queue.Queue()
    b = Broadcaster(1)
    b.register(kept)
    b.register(dropped)
    b.unregister(dropped)
    b.submit(BroadcastMessage(data="hello"))
    b.close()
    assert dropped.empty()
    assert kept.get(timeout=2).data == "hello"


def test_messages_keep_order():
    out = queue.Queue()
    b = Broadcaster(0)
    b.register(out)
    for n in range(5):
        b.submit(BroadcastMessage(data=n))
    b.close()
    assert [out.get(timeout=2).data for _ in range(5)] == [0, 1, 2, 3, 4]


def test_closed_broadcaster_rejects_use():
    b = Broadcaster(1)
    b.close()
    with pytest.raises(RuntimeError):
        b.register(queue.Queue())
    with pytest.raises(RuntimeError):
        b.submit(BroadcastMessage())


def test_messages_get_distinct_ids():
    assert BroadcastMessage().id != BroadcastMessage().id
    assert BroadcastMessage().source == BroadcastSource.OPERATOR_SYNC
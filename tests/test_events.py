import pytest
from mapruler.events import EventEmitter


class TestEventEmitter:

    def test_fire_calls_listeners_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("ping", lambda event, data: calls.append(("first", event, data)))
        emitter.on("ping", lambda event, data: calls.append(("second", event, data)))

        emitter.fire("ping", 42)

        assert calls == [("first", "ping", 42), ("second", "ping", 42)]

    def test_fire_without_listeners(self):
        EventEmitter().fire("nothing")

    def test_off_removes_one_registration(self):
        emitter = EventEmitter()
        calls = []

        def listener(event, data):
            calls.append(data)

        emitter.on("ping", listener)
        emitter.on("ping", listener)
        emitter.off("ping", listener)
        emitter.fire("ping", 1)

        assert calls == [1]

    def test_off_unknown_is_ignored(self):
        emitter = EventEmitter()
        emitter.off("ping", print)
        emitter.on("ping", print)
        emitter.off("ping", len)
        assert emitter.listeners("ping") == [print]

    def test_bound_methods_can_be_removed(self):
        class Receiver:
            def __init__(self):
                self.count = 0

            def handle(self, event, data):
                self.count += 1

        emitter = EventEmitter()
        receiver = Receiver()
        emitter.on("ping", receiver.handle)
        emitter.off("ping", receiver.handle)
        emitter.fire("ping")

        assert receiver.count == 0
        assert emitter.listeners("ping") == []

    def test_listener_errors_propagate(self):
        emitter = EventEmitter()

        def broken(event, data):
            raise RuntimeError("boom")

        emitter.on("ping", broken)
        with pytest.raises(RuntimeError, match="boom"):
            emitter.fire("ping")

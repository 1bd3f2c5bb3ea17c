"""Tests for the broadcast chat channel."""

import gc

import pytest

from userhub.api.chat.registry import BroadcastRelay, ConnectionRegistry
from userhub.api.chat.router import decode_frame


class FakeConnection:
    """Stands in for a WebSocket."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list = []
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(data)


# ==================== Registry Tests ====================


class TestConnectionRegistry:
    """Tests for ConnectionRegistry."""

    def test_add_and_discard(self):
        """Test connections are added and removed."""
        registry = ConnectionRegistry()
        a, b = FakeConnection(), FakeConnection()

        registry.add(a)
        registry.add(b)
        registry.add(a)
        assert len(registry) == 2

        registry.discard(a)
        registry.discard(a)
        assert registry.connections() == [b]

    def test_holds_weak_references(self):
        """Test dropped connections leave the registry."""
        registry = ConnectionRegistry()
        connection = FakeConnection()
        registry.add(connection)
        assert len(registry) == 1

        del connection
        gc.collect()
        assert len(registry) == 0


# ==================== Relay Tests ====================


class TestBroadcastRelay:
    """Tests for BroadcastRelay."""

    @pytest.mark.asyncio
    async def test_relay_reaches_everyone(self):
        """Test a frame goes to every registered connection."""
        registry = ConnectionRegistry()
        connections = [FakeConnection() for _ in range(3)]
        for connection in connections:
            registry.add(connection)

        frame = {"type": "message", "data": "hi"}
        delivered = await BroadcastRelay(registry).relay(frame)

        assert delivered == 3
        for connection in connections:
            assert connection.sent == [frame]

    @pytest.mark.asyncio
    async def test_failed_connection_is_dropped(self):
        """Test a failing send removes that connection only."""
        registry = ConnectionRegistry()
        good, bad = FakeConnection(), FakeConnection(fail=True)
        registry.add(good)
        registry.add(bad)

        delivered = await BroadcastRelay(registry).relay({"type": "message", "data": 1})

        assert delivered == 1
        assert registry.connections() == [good]

    @pytest.mark.asyncio
    async def test_relay_with_no_connections(self):
        """Test relaying to an empty registry."""
        assert await BroadcastRelay(ConnectionRegistry()).relay({"type": "message"}) == 0


# ==================== WebSocket Endpoint Tests ====================


class TestChatEndpoint:
    """Tests for the /ws endpoint."""

    def test_message_reaches_all_clients_including_sender(self, client):
        """Test three clients all receive one client's message."""
        with client.websocket_connect("/ws") as a, client.websocket_connect(
            "/ws"
        ) as b, client.websocket_connect("/ws") as c:
            a.send_json({"type": "message", "data": "hi"})

            for websocket in (a, b, c):
                assert websocket.receive_json() == {"type": "message", "data": "hi"}

    def test_payload_relayed_verbatim(self, client):
        """Test structured payloads are relayed unchanged."""
        payload = {"from": "ada", "text": "hello", "tags": [1, 2]}
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
            b.send_json({"type": "message", "data": payload})
            assert a.receive_json() == {"type": "message", "data": payload}
            assert b.receive_json() == {"type": "message", "data": payload}

    def test_other_events_ignored(self, client):
        """Test frames that are not messages are not relayed."""
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
            a.send_json({"type": "typing", "data": "..."})
            a.send_json({"type": "message", "data": "after"})
            assert b.receive_json() == {"type": "message", "data": "after"}

    def test_invalid_json(self, client):
        """Test non-JSON input gets an error frame back."""
        with client.websocket_connect("/ws") as a:
            a.send_text("not json")
            assert a.receive_json() == {"type": "error", "data": {"message": "Invalid JSON"}}

    def test_disconnect_unregisters(self, client, app):
        """Test closed sockets leave the registry."""
        registry = app.state.chat_relay.registry
        with client.websocket_connect("/ws") as a:
            a.send_json({"type": "message", "data": "ping"})
            a.receive_json()
            assert len(registry) == 1
        with client.websocket_connect("/ws") as b:
            b.send_json({"type": "message", "data": "ping"})
            b.receive_json()
            assert len(registry) == 1

    def test_binary_message_relayed(self, client):
        """Test a JSON message sent as a binary frame is relayed."""
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b:
            b.send_bytes(b'{"type":"message","data":"x"}')
            assert a.receive_json() == {"type": "message", "data": "x"}
            assert b.receive_json() == {"type": "message", "data": "x"}

    def test_invalid_binary_frame(self, client):
        """Test binary frames that are not UTF-8 JSON get an error frame back."""
        with client.websocket_connect("/ws") as a:
            a.send_bytes(b"\xff\xfe\x00")
            assert a.receive_json() == {"type": "error", "data": {"message": "Invalid JSON"}}

            a.send_bytes(b"not json")
            assert a.receive_json() == {"type": "error", "data": {"message": "Invalid JSON"}}

            a.send_json({"type": "message", "data": "still here"})
            assert a.receive_json() == {"type": "message", "data": "still here"}


class TestDecodeFrame:
    """Tests for decode_frame."""

    def test_text(self):
        """Test text frames are parsed."""
        assert decode_frame({"type": "websocket.receive", "text": '{"a": 1}'}) == {"a": 1}

    def test_bytes(self):
        """Test binary frames are parsed."""
        message = {"type": "websocket.receive", "text": None, "bytes": b'{"a": 1}'}
        assert decode_frame(message) == {"a": 1}

    @pytest.mark.parametrize(
        "message",
        [
            {"type": "websocket.receive", "text": "{"},
            {"type": "websocket.receive", "bytes": b"\xff"},
            {"type": "websocket.receive"},
        ],
    )
    def test_invalid(self, message):
        """Test undecodable frames raise ValueError."""
        with pytest.raises(ValueError):
            decode_frame(message)

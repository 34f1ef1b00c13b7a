"""
Unit tests for the event envelope and NATSEventBus against a fake JetStream
"""
import json
from datetime import datetime
from decimal import Decimal

import pytest

from core import nats_client
from core.config import AppConfig, InfraConfig
from core.config_manager import ConfigManager
from core.nats_client import (
    DecimalEncoder,
    Event,
    EventType,
    NATSEventBus,
    ServiceSource,
    create_event,
)

pytestmark = pytest.mark.unit


def _config(**infra) -> ConfigManager:
    return ConfigManager("test_service", settings=AppConfig(infrastructure=InfraConfig(**infra)))


class TestEvent:

    def test_envelope_round_trip(self):
        event = create_event(
            EventType.SPORTS_EVENT_JOINED,
            ServiceSource.SPORTS_EVENT_SERVICE,
            {"event_id": "e1", "user_id": "u1"},
            subject="e1",
        )

        restored = Event.from_dict(json.loads(json.dumps(event.to_dict())))

        assert restored.type == "sports.event.joined"
        assert restored.source == "sports_event_service"
        assert restored.subject == "e1"
        assert restored.data == {"event_id": "e1", "user_id": "u1"}
        assert restored.id == event.id
        assert datetime.fromisoformat(restored.timestamp).utcoffset().total_seconds() == 0

    def test_encoder_handles_decimal_and_datetime(self):
        encoded = json.dumps({"n": Decimal("1.5"), "at": datetime(2024, 1, 1)}, cls=DecimalEncoder)

        assert json.loads(encoded) == {"n": 1.5, "at": "2024-01-01T00:00:00"}


class TestNATSEventBus:

    def test_servers_from_nats_url(self):
        bus = NATSEventBus("test_service", config=_config(nats_url="nats://bus:4222"))

        assert bus.servers == "nats://bus:4222"

    def test_servers_from_host_and_port(self, monkeypatch):
        monkeypatch.delenv("NATS_HOST", raising=False)
        monkeypatch.delenv("NATS_PORT", raising=False)
        bus = NATSEventBus("test_service", config=_config(nats_host="nats", nats_port=4333))

        assert bus.servers == "nats://nats:4333"

    @pytest.mark.parametrize(
        "event_type,stream",
        [
            ("sports.event.created", "sports-stream"),
            ("chat.message.sent", "chat-stream"),
            ("profile.updated", "profile-stream"),
            ("user.signed_in", "user-stream"),
            ("other.thing", "other-stream"),
        ],
    )
    def test_stream_names(self, event_type, stream):
        bus = NATSEventBus("test_service", config=_config(), servers="nats://localhost:4222")

        assert bus._get_stream_name_for_event(event_type) == stream

    @pytest.mark.asyncio
    async def test_publish_without_connection_returns_false(self):
        bus = NATSEventBus("test_service", config=_config(), servers="nats://localhost:4222")
        event = create_event(EventType.PROFILE_CREATED, ServiceSource.PROFILE_SERVICE, {"user_id": "u1"})

        assert await bus.publish_event(event) is False
        assert bus.is_connected is False


class _FakeMessage:
    def __init__(self, event: Event):
        self.subject = event.type
        self.data = json.dumps(event.to_dict()).encode()
        self.acked = False

    async def ack(self):
        self.acked = True


class _FakeSubscription:
    def __init__(self):
        self.unsubscribed = False

    async def unsubscribe(self):
        self.unsubscribed = True


class _FakeJetStream:
    def __init__(self):
        self.streams = []
        self.callbacks = {}
        self.subscriptions = []

    async def add_stream(self, name, subjects):
        self.streams.append((name, subjects))

    async def subscribe(self, subject, durable=None, cb=None):
        self.callbacks[subject] = cb
        sub = _FakeSubscription()
        self.subscriptions.append(sub)
        return sub


@pytest.fixture
def connected_bus():
    bus = NATSEventBus("test_service", config=_config(), servers="nats://localhost:4222")
    bus._js = _FakeJetStream()
    bus._is_connected = True
    return bus


@pytest.mark.asyncio
class TestSubscriptions:

    async def test_subscribe_without_connection(self):
        bus = NATSEventBus("test_service", config=_config(), servers="nats://localhost:4222")

        assert await bus.subscribe_to_events("sports.event.*", lambda e: None) is None

    async def test_handler_receives_event_and_message_is_acked(self, connected_bus):
        received = []

        async def handler(event):
            received.append(event)

        consumer = await connected_bus.subscribe_to_events("sports.event.*", handler, durable="roster")
        event = create_event(
            EventType.SPORTS_EVENT_JOINED, ServiceSource.SPORTS_EVENT_SERVICE, {"event_id": "e1"}, subject="e1"
        )
        message = _FakeMessage(event)
        await connected_bus._js.callbacks["sports.event.*"](message)

        assert consumer == "roster"
        assert connected_bus._js.streams == [("sports-stream", ["sports.>"])]
        assert received[0].id == event.id
        assert message.acked

    async def test_failing_handler_leaves_message_unacked(self, connected_bus):
        async def handler(event):
            raise RuntimeError("boom")

        await connected_bus.subscribe_to_events("chat.message.*", handler)
        message = _FakeMessage(
            create_event(EventType.CHAT_MESSAGE_SENT, ServiceSource.CHAT_SERVICE, {"event_id": "e1"})
        )
        await connected_bus._js.callbacks["chat.message.*"](message)

        assert not message.acked

    async def test_unsubscribe(self, connected_bus):
        await connected_bus.subscribe_to_events("profile.*", lambda e: None)

        assert await connected_bus.unsubscribe("profile.*") is True
        assert await connected_bus.unsubscribe("profile.*") is False
        assert connected_bus._js.subscriptions[0].unsubscribed

    async def test_close_releases_subscriptions(self, connected_bus):
        await connected_bus.subscribe_to_events("user.*", lambda e: None)

        await connected_bus.close()

        assert connected_bus._js.subscriptions[0].unsubscribed
        assert connected_bus.is_connected is False


@pytest.mark.asyncio
async def test_get_event_bus_is_shared(monkeypatch):
    connects = []

    async def fake_connect(self):
        connects.append(self.service_name)

    monkeypatch.setattr(nats_client, "_event_bus", None)
    monkeypatch.setattr(NATSEventBus, "connect", fake_connect)

    first = await nats_client.get_event_bus("campus_sports", config=_config())
    second = await nats_client.get_event_bus("other", config=_config())

    assert first is second
    assert connects == ["campus_sports"]

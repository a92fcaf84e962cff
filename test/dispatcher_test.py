import asyncio
from types import SimpleNamespace

import pytest
from firebase_admin.exceptions import FirebaseError

from conftest import FakeTransport
from post_notifications.app.notifications.builder import build_envelope
from post_notifications.app.notifications.dispatcher import Dispatcher
from post_notifications.app.notifications.errors import DeliveryError
from post_notifications.app.notifications.schemas import NotificationIntent, NotificationKind


def _envelope(kind=NotificationKind.DIRECT, tokens=('tok',)):
    return build_envelope(NotificationIntent(
        kind=kind,
        recipient_tokens=list(tokens),
        title="T",
        body="B",
    ))


def _unregistered():
    return FirebaseError('NOT_FOUND', 'Requested entity was not found.')


def test_send_one_returns_message_id(dispatcher, transport):
    message_id = asyncio.run(dispatcher.send_one(_envelope()))

    assert message_id == "projects/test/messages/1"
    assert len(transport.sent) == 1


def test_send_one_wraps_transport_errors():
    dispatcher = Dispatcher(FakeTransport(error=_unregistered()))

    with pytest.raises(DeliveryError):
        asyncio.run(dispatcher.send_one(_envelope()))


def test_send_one_wraps_sdk_validation_errors():
    dispatcher = Dispatcher(FakeTransport(error=ValueError("bad token")))

    with pytest.raises(DeliveryError):
        asyncio.run(dispatcher.send_one(_envelope()))


def test_send_batch_counts_partial_failure():
    transport = FakeTransport(batch_errors={'B': _unregistered()})
    dispatcher = Dispatcher(transport)
    tokens = ['A', 'B', 'C']

    result = asyncio.run(dispatcher.send_batch(_envelope(NotificationKind.BATCH, tokens), tokens))

    assert result.successCount == 2
    assert result.failureCount == 1
    assert [r.token for r in result.responses] == tokens
    assert result.responses[1].success is False
    assert result.responses[1].errorCode == 'NOT_FOUND'
    assert result.responses[0].messageId == "msg-0"
    assert len(transport.multicasts) == 1


@pytest.mark.parametrize("failed", [
    [], ['A'], ['B'], ['C'], ['A', 'C'], ['A', 'B', 'C'],
])
def test_send_batch_keeps_positions(failed):
    transport = FakeTransport(batch_errors={token: _unregistered() for token in failed})
    dispatcher = Dispatcher(transport)
    tokens = ['A', 'B', 'C']

    result = asyncio.run(dispatcher.send_batch(_envelope(NotificationKind.BATCH, tokens), tokens))

    assert result.failureCount == len(failed)
    assert result.successCount == len(tokens) - len(failed)
    for token, response in zip(tokens, result.responses):
        assert response.token == token
        assert response.success is (token not in failed)


def test_send_batch_whole_call_failure():
    transport = FakeTransport(batch_error=FirebaseError('UNAVAILABLE', 'backend down'))
    dispatcher = Dispatcher(transport)

    with pytest.raises(DeliveryError):
        asyncio.run(dispatcher.send_batch(_envelope(NotificationKind.BATCH, ['A']), ['A']))


def test_send_batch_rejects_misaligned_reply():
    class ShortTransport:
        async def send_multicast(self, envelope, tokens):
            return SimpleNamespace(responses=[SimpleNamespace(success=True, message_id="m", exception=None)])

    dispatcher = Dispatcher(ShortTransport())

    with pytest.raises(DeliveryError):
        asyncio.run(dispatcher.send_batch(_envelope(NotificationKind.BATCH, ['A', 'B']), ['A', 'B']))

import asyncio
import logging
from typing import List

from firebase_admin import messaging

from .schemas import MessageEnvelope

logger = logging.getLogger(__name__)


def _notification(envelope: MessageEnvelope) -> messaging.Notification:
    return messaging.Notification(title=envelope.title, body=envelope.body)


def _android_config(envelope: MessageEnvelope) -> messaging.AndroidConfig:
    hints = envelope.android
    return messaging.AndroidConfig(
        priority=hints.priority,
        notification=messaging.AndroidNotification(
            sound=hints.sound,
            channel_id=hints.channel_id
        )
    )


def _apns_config(envelope: MessageEnvelope) -> messaging.APNSConfig:
    hints = envelope.apns
    return messaging.APNSConfig(
        payload=messaging.APNSPayload(
            aps=messaging.Aps(sound=hints.sound, badge=hints.badge)
        )
    )


def to_message(envelope: MessageEnvelope) -> messaging.Message:
    return messaging.Message(
        notification=_notification(envelope),
        data=dict(envelope.data),
        token=envelope.token,
        android=_android_config(envelope),
        apns=_apns_config(envelope)
    )


def to_multicast_message(envelope: MessageEnvelope, tokens: List[str]) -> messaging.MulticastMessage:
    return messaging.MulticastMessage(
        tokens=list(tokens),
        notification=_notification(envelope),
        data=dict(envelope.data),
        android=_android_config(envelope),
        apns=_apns_config(envelope)
    )


class FcmTransport:
    """Firebase Cloud Messaging transport."""

    def __init__(self, app=None):
        self.app = app

    async def send(self, envelope: MessageEnvelope) -> str:
        message = to_message(envelope)
        # The Admin SDK is synchronous, run it in a worker thread
        return await asyncio.to_thread(messaging.send, message, app=self.app)

    async def send_multicast(self, envelope: MessageEnvelope, tokens: List[str]) -> messaging.BatchResponse:
        message = to_multicast_message(envelope, tokens)
        return await asyncio.to_thread(messaging.send_each_for_multicast, message, app=self.app)

from ..config import settings
from .schemas import AndroidHints, ApnsHints, MessageEnvelope, NotificationIntent, NotificationKind


def build_envelope(intent: NotificationIntent) -> MessageEnvelope:
    """
    Attach platform delivery hints to a resolved intent.

    Single-recipient kinds get the high importance Android channel and a unit
    badge on iOS; batch envelopes carry only priority and sound.
    """
    is_batch = intent.kind == NotificationKind.BATCH

    android = AndroidHints(
        priority=settings.android_priority,
        sound=settings.notification_sound,
        channel_id=None if is_batch else settings.android_channel_id,
    )
    apns = ApnsHints(
        sound=settings.notification_sound,
        badge=None if is_batch else settings.apns_badge,
    )

    return MessageEnvelope(
        kind=intent.kind,
        title=intent.title,
        body=intent.body,
        data=dict(intent.data),
        token=intent.recipient_token,
        android=android,
        apns=apns,
    )

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from .builder import build_envelope
from .dispatcher import Dispatcher
from .enricher import Enricher
from .schemas import CallableRequest, DocumentEvent
from .triggers import registry
from ..dependencies import get_dispatcher, get_enricher

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/sendNotification')
async def send_notification(
    request: CallableRequest,
    dispatcher: Annotated[Dispatcher, Depends(get_dispatcher)]
):
    """
    Send a push notification to a single device token
    """
    intent = Enricher.direct_intent(request.data)
    message_id = await dispatcher.send_one(build_envelope(intent))
    return {'result': {'success': True, 'messageId': message_id}}


@router.post('/sendBatchNotifications')
async def send_batch_notifications(
    request: CallableRequest,
    dispatcher: Annotated[Dispatcher, Depends(get_dispatcher)]
):
    """
    Send one notification to many device tokens in a single multicast call
    """
    intent = Enricher.batch_intent(request.data)
    batch = await dispatcher.send_batch(build_envelope(intent), intent.recipient_tokens)
    return {
        'result': {
            'success': True,
            'successCount': batch.successCount,
            'failureCount': batch.failureCount,
            'responses': [r.model_dump() for r in batch.responses],
        }
    }


@router.post('/events')
async def handle_document_event(
    event: DocumentEvent,
    enricher: Annotated[Enricher, Depends(get_enricher)],
    dispatcher: Annotated[Dispatcher, Depends(get_dispatcher)]
):
    """
    Ingress for document change notifications (likes, comments, user deletions)
    """
    logger.info(f"Received {event.eventType} event for {event.document}")
    message_id = await registry.dispatch(event, enricher, dispatcher)
    return {'handled': message_id is not None, 'messageId': message_id}

"""
Document trigger adapters.

Each handler is registered against a document path pattern and an event type,
mirroring the way Firestore triggers are declared:

    posts/{postId}/likes/{userId}          created -> on_like_created
    posts/{postId}/comments/{commentId}    created -> on_comment_created
    users/{userId}                         deleted -> on_user_deleted

Handlers receive the path parameters and the created/deleted document data and
return the FCM message ID when a notification went out, None otherwise. They
never raise: a failing notification must not affect delivery of other events.
"""
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Tuple

from .builder import build_envelope
from .dispatcher import Dispatcher
from .enricher import Enricher
from .schemas import CommentRecord, DocumentEvent, DocumentEventType

logger = logging.getLogger(__name__)

TriggerHandler = Callable[
    [Dict[str, str], Optional[Dict[str, Any]], Enricher, Dispatcher],
    Awaitable[Optional[str]]
]

_PARAM_SEGMENT = re.compile(r'^\{(\w+)\}$')


def compile_path_pattern(path_pattern: str) -> Pattern:
    """Turn 'posts/{postId}/likes/{userId}' into a regex with named groups."""
    parts = []
    for segment in path_pattern.strip('/').split('/'):
        param = _PARAM_SEGMENT.match(segment)
        if param:
            parts.append(f'(?P<{param.group(1)}>[^/]+)')
        else:
            parts.append(re.escape(segment))
    return re.compile('^' + '/'.join(parts) + '$')


class TriggerRegistry:
    """Routes document change events to the handler registered for their path."""

    def __init__(self):
        self._triggers: List[Tuple[DocumentEventType, str, Pattern, TriggerHandler]] = []

    def on(self, event_type: DocumentEventType, path_pattern: str):
        compiled = compile_path_pattern(path_pattern)

        def decorator(handler: TriggerHandler) -> TriggerHandler:
            self._triggers.append((event_type, path_pattern, compiled, handler))
            return handler

        return decorator

    def match(self, event_type: str, document: str) -> Optional[Tuple[TriggerHandler, Dict[str, str]]]:
        document = document.strip('/')
        for registered_type, _, compiled, handler in self._triggers:
            if registered_type.value != event_type:
                continue
            matched = compiled.match(document)
            if matched:
                return handler, matched.groupdict()
        return None

    async def dispatch(self, event: DocumentEvent, enricher: Enricher, dispatcher: Dispatcher) -> Optional[str]:
        found = self.match(event.eventType, event.document)
        if found is None:
            logger.warning(f"No trigger registered for {event.eventType} {event.document}")
            return None

        handler, params = found
        return await handler(params, event.data, enricher, dispatcher)

    @property
    def registered_paths(self) -> List[Tuple[str, str]]:
        return [(event_type.value, path) for event_type, path, _, _ in self._triggers]


registry = TriggerRegistry()


@registry.on(DocumentEventType.CREATED, 'posts/{postId}/likes/{userId}')
async def on_like_created(
        params: Dict[str, str],
        data: Optional[Dict[str, Any]],
        enricher: Enricher,
        dispatcher: Dispatcher
) -> Optional[str]:
    try:
        intent = await enricher.enrich_like(params['postId'], params['userId'])
        if intent is None:
            return None
        return await dispatcher.send_one(build_envelope(intent))
    except Exception as e:
        logger.error(f"Error sending like notification: {str(e)}", exc_info=True)
        return None


@registry.on(DocumentEventType.CREATED, 'posts/{postId}/comments/{commentId}')
async def on_comment_created(
        params: Dict[str, str],
        data: Optional[Dict[str, Any]],
        enricher: Enricher,
        dispatcher: Dispatcher
) -> Optional[str]:
    try:
        comment = CommentRecord(**(data or {}))
        intent = await enricher.enrich_comment(params['postId'], params['commentId'], comment)
        if intent is None:
            return None
        return await dispatcher.send_one(build_envelope(intent))
    except Exception as e:
        logger.error(f"Error sending comment notification: {str(e)}", exc_info=True)
        return None


@registry.on(DocumentEventType.DELETED, 'users/{userId}')
async def on_user_deleted(
        params: Dict[str, str],
        data: Optional[Dict[str, Any]],
        enricher: Enricher,
        dispatcher: Dispatcher
) -> Optional[str]:
    # Nothing is invalidated here, the hook only records that cleanup ran
    logger.info(f"Cleaning up FCM token for user: {params.get('userId')}")
    return None

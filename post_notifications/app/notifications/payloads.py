import json
from typing import Any, Dict, Mapping, Optional

from ..config import settings
from .schemas import Actor, NotificationKind, PostSummary

LIKE_PAYLOAD_KEYS = ('type', 'postId', 'likerId', 'likerName', 'click_action')
COMMENT_PAYLOAD_KEYS = (
    'type', 'postId', 'commentId', 'commenterId', 'commenterName', 'commentText', 'click_action'
)


def like_payload(post: PostSummary, liker: Actor) -> Dict[str, str]:
    return {
        'type': NotificationKind.LIKE.value,
        'postId': post.id,
        'likerId': liker.id,
        'likerName': liker.displayName,
        'click_action': settings.click_action,
    }


def comment_payload(post: PostSummary, commenter: Actor, comment_id: str, comment_text: str) -> Dict[str, str]:
    return {
        'type': NotificationKind.COMMENT.value,
        'postId': post.id,
        'commentId': comment_id,
        'commenterId': commenter.id,
        'commenterName': commenter.displayName,
        'commentText': comment_text,
        'click_action': settings.click_action,
    }


def _payload_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ''
    # JSON keeps bools and containers readable to the client ("true", '{"a": 1}')
    if isinstance(value, (bool, dict, list, tuple)):
        return json.dumps(value)
    return str(value)


def direct_payload(data: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Caller-supplied data with every key and value converted to a string for FCM."""
    if not data:
        return {}
    return {str(k): _payload_value(v) for k, v in data.items()}

"""
Fallback rules for optional document fields.

Every helper here is total: it accepts records with any combination of
missing fields and always returns a usable value.
"""
from typing import Optional

from ..config import settings
from .schemas import Actor, PostRecord, PostSummary, TargetOwner, UserRecord

ELLIPSIS = '...'


def display_name(user: UserRecord) -> str:
    """Join first and last name, falling back to a placeholder when both are blank."""
    full_name = f"{user.firstname or ''} {user.lastname or ''}".strip()
    return full_name or settings.fallback_actor_name


def display_title(post: PostRecord) -> str:
    """Post title, else the start of its plain text, else a placeholder."""
    if post.title:
        return post.title
    if post.plainText:
        return post.plainText[:settings.post_title_preview_length]
    return settings.fallback_post_title


def comment_preview(text: Optional[str]) -> str:
    text = text or ''
    limit = settings.comment_preview_length
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def delivery_token(user: UserRecord) -> Optional[str]:
    # Empty strings count as "no token"
    return user.fcmToken or None


def to_actor(user: UserRecord) -> Actor:
    return Actor(id=user.id, displayName=display_name(user))


def to_target_owner(user: UserRecord) -> TargetOwner:
    return TargetOwner(id=user.id, deliveryToken=delivery_token(user))


def to_post_summary(post: PostRecord) -> PostSummary:
    return PostSummary(id=post.id, displayTitle=display_title(post))

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from .errors import InvalidArgument, NotFound
from .formatting import comment_preview, to_actor, to_post_summary, to_target_owner
from .lookup import LookupClient
from .payloads import comment_payload, direct_payload, like_payload
from .schemas import (
    Actor,
    CommentRecord,
    NotificationIntent,
    NotificationKind,
    PostSummary,
    TargetOwner,
)

logger = logging.getLogger(__name__)

LIKE_TITLE = "❤️ New Like"
COMMENT_TITLE = "💬 New Comment"


class Enricher:
    """Resolves raw social events and direct requests into notification intents."""

    def __init__(self, lookup: LookupClient):
        self.lookup = lookup

    async def _resolve_participants(
            self, post_id: str, actor_id: Optional[str], action: str
    ) -> Optional[Tuple[PostSummary, Actor, TargetOwner]]:
        """
        Look up the post, the acting user and the post owner, stopping at the
        first missing piece.

        Args:
            post_id: ID of the post that was acted on
            actor_id: ID of the user who liked or commented
            action: Short verb used in log lines ("liked", "commented on")

        Returns:
            (post, actor, owner) when a notification should be sent, None otherwise
        """
        try:
            post = await self.lookup.get_post(post_id)
        except NotFound:
            logger.info(f"Post {post_id} not found, skipping")
            return None

        owner_id = post.createdBy
        if not owner_id:
            logger.info(f"Post {post_id} has no owner, skipping")
            return None

        if actor_id == owner_id:
            logger.info(f"User {actor_id} {action} own post {post_id}, skipping")
            return None

        try:
            actor_record = await self.lookup.get_user(actor_id)
        except NotFound:
            logger.info(f"Actor {actor_id} not found, skipping")
            return None
        actor = to_actor(actor_record)

        try:
            owner_record = await self.lookup.get_user(owner_id)
        except NotFound:
            logger.info(f"Owner {owner_id} not found, skipping")
            return None
        owner = to_target_owner(owner_record)

        if not owner.deliveryToken:
            logger.info(f"No FCM token for owner {owner_id}, skipping")
            return None

        return to_post_summary(post), actor, owner

    async def enrich_like(self, post_id: str, liker_id: str) -> Optional[NotificationIntent]:
        resolved = await self._resolve_participants(post_id, liker_id, "liked")
        if resolved is None:
            return None
        post, liker, owner = resolved

        return NotificationIntent(
            kind=NotificationKind.LIKE,
            recipient_tokens=[owner.deliveryToken],
            title=LIKE_TITLE,
            body=f'{liker.displayName} liked your post "{post.displayTitle}"',
            data=like_payload(post, liker),
        )

    async def enrich_comment(
            self, post_id: str, comment_id: str, comment: CommentRecord
    ) -> Optional[NotificationIntent]:
        """
        Build the notification for a new comment.

        Args:
            post_id: ID of the commented post
            comment_id: ID of the created comment document
            comment: The created comment; its userId is the commenter

        Returns:
            The intent, or None when any enrichment rule is not met
        """
        if not comment.userId:
            logger.info(f"Comment {comment_id} on post {post_id} has no author, skipping")
            return None

        resolved = await self._resolve_participants(post_id, comment.userId, "commented on")
        if resolved is None:
            return None
        post, commenter, owner = resolved

        preview = comment_preview(comment.text)
        return NotificationIntent(
            kind=NotificationKind.COMMENT,
            recipient_tokens=[owner.deliveryToken],
            title=COMMENT_TITLE,
            body=f'{commenter.displayName} commented on "{post.displayTitle}"',
            data=comment_payload(post, commenter, comment_id, preview),
        )

    @staticmethod
    def direct_intent(request: Any) -> NotificationIntent:
        """
        Validate a direct single-send request.

        Raises:
            InvalidArgument: token, title or body is missing
        """
        request = _require_mapping(request)
        token = request.get('token')
        title = request.get('title')
        body = request.get('body')

        if not _is_filled(token) or not _is_filled(title) or not _is_filled(body):
            raise InvalidArgument("token, title and body are required")

        return NotificationIntent(
            kind=NotificationKind.DIRECT,
            recipient_tokens=[token],
            title=title,
            body=body,
            data=direct_payload(_optional_data(request)),
        )

    @staticmethod
    def batch_intent(request: Any) -> NotificationIntent:
        """
        Validate a direct batch-send request.

        Raises:
            InvalidArgument: tokens is not a non-empty list, or title/body is missing
        """
        request = _require_mapping(request)
        tokens = request.get('tokens')

        if not isinstance(tokens, list) or len(tokens) == 0:
            raise InvalidArgument("tokens must be a non-empty array")
        if not all(_is_filled(token) for token in tokens):
            raise InvalidArgument("tokens must only contain non-empty strings")

        title = request.get('title')
        body = request.get('body')
        if not _is_filled(title) or not _is_filled(body):
            raise InvalidArgument("title and body are required")

        return NotificationIntent(
            kind=NotificationKind.BATCH,
            recipient_tokens=list(tokens),
            title=title,
            body=body,
            data=direct_payload(_optional_data(request)),
        )


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and value != ''


def _require_mapping(request: Any) -> Mapping:
    if not isinstance(request, Mapping):
        raise InvalidArgument("request data must be an object")
    return request


def _optional_data(request: Mapping) -> Optional[Mapping]:
    data = request.get('data')
    if data is not None and not isinstance(data, Mapping):
        raise InvalidArgument("data must be an object of string values")
    return data

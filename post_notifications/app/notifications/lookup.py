import asyncio
import logging
from typing import Any, Dict

from .errors import NotFound
from .schemas import PostRecord, UserRecord

logger = logging.getLogger(__name__)

USERS_COLLECTION = 'users'
POSTS_COLLECTION = 'posts'


class LookupClient:
    """Read-only accessor for user and post documents in Firestore."""

    def __init__(self, firestore_db):
        self.firestore_db = firestore_db

    async def _get_document(self, collection: str, document_id: str) -> Dict[str, Any]:
        if not document_id:
            raise NotFound(collection, document_id)

        doc_ref = self.firestore_db.collection(collection).document(document_id)
        # Firestore's sync client blocks, keep it off the event loop
        doc = await asyncio.to_thread(doc_ref.get)

        if not doc.exists:
            logger.debug(f"{collection}/{document_id} does not exist")
            raise NotFound(collection, document_id)

        return doc.to_dict() or {}

    async def get_user(self, user_id: str) -> UserRecord:
        data = await self._get_document(USERS_COLLECTION, user_id)
        return UserRecord(**{**data, 'id': user_id})

    async def get_post(self, post_id: str) -> PostRecord:
        data = await self._get_document(POSTS_COLLECTION, post_id)
        return PostRecord(**{**data, 'id': post_id})

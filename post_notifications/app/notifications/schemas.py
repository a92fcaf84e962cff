from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NotificationKind(str, Enum):
    LIKE = "like"
    COMMENT = "comment"
    DIRECT = "direct"
    BATCH = "batch"


class UserRecord(BaseModel):
    """Fields read from a users/{userId} document"""
    model_config = ConfigDict(extra="ignore")

    id: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    fcmToken: Optional[str] = None


class PostRecord(BaseModel):
    """Fields read from a posts/{postId} document"""
    model_config = ConfigDict(extra="ignore")

    id: str
    createdBy: Optional[str] = None
    title: Optional[str] = None
    plainText: Optional[str] = None


class CommentRecord(BaseModel):
    """Fields read from a created posts/{postId}/comments/{commentId} document"""
    model_config = ConfigDict(extra="ignore")

    userId: Optional[str] = None
    text: Optional[str] = None


class Actor(BaseModel):
    id: str
    displayName: str


class TargetOwner(BaseModel):
    id: str
    deliveryToken: Optional[str] = None


class PostSummary(BaseModel):
    id: str
    displayTitle: str


class NotificationIntent(BaseModel):
    """Transport-agnostic notification produced by the enricher"""
    kind: NotificationKind
    recipient_tokens: List[str]
    title: str
    body: str
    data: Dict[str, str] = Field(default_factory=dict)

    @property
    def recipient_token(self) -> Optional[str]:
        if self.kind == NotificationKind.BATCH or not self.recipient_tokens:
            return None
        return self.recipient_tokens[0]


class AndroidHints(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: str
    sound: str
    channel_id: Optional[str] = None


class ApnsHints(BaseModel):
    model_config = ConfigDict(frozen=True)

    sound: str
    badge: Optional[int] = None


class MessageEnvelope(BaseModel):
    """Transport-ready message: the intent plus platform delivery hints"""
    model_config = ConfigDict(frozen=True)

    kind: NotificationKind
    title: str
    body: str
    data: Dict[str, str] = Field(default_factory=dict)
    token: Optional[str] = None
    android: AndroidHints
    apns: ApnsHints


class TokenResult(BaseModel):
    token: str
    success: bool
    messageId: Optional[str] = None
    error: Optional[str] = None
    errorCode: Optional[str] = None


class BatchResult(BaseModel):
    successCount: int
    failureCount: int
    responses: List[TokenResult]


class DocumentEventType(str, Enum):
    CREATED = "created"
    DELETED = "deleted"


class DocumentEvent(BaseModel):
    """Change notification delivered by the document store"""
    # Kept open: the store also emits types no trigger listens for
    eventType: str
    document: str
    data: Optional[Dict[str, Any]] = None


class CallableRequest(BaseModel):
    """Callable function request envelope: the payload sits under 'data'"""
    data: Any = None

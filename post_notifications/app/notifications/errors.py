class NotificationError(Exception):
    """Base class for errors raised by the notification pipeline."""


class InvalidArgument(NotificationError):
    """A direct request is missing or has malformed fields."""


class NotFound(NotificationError):
    """A referenced user or post document does not exist."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class DeliveryError(NotificationError):
    """The messaging transport rejected a send."""

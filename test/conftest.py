from types import SimpleNamespace

import pytest

from post_notifications.app.notifications.dispatcher import Dispatcher
from post_notifications.app.notifications.enricher import Enricher
from post_notifications.app.notifications.lookup import LookupClient


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, store, collection, document_id):
        self.store = store
        self.path = f"{collection}/{document_id}"

    def get(self):
        self.store.reads.append(self.path)
        return FakeSnapshot(self.store.documents.get(self.path))


class FakeCollectionRef:
    def __init__(self, store, name):
        self.store = store
        self.name = name

    def document(self, document_id):
        return FakeDocumentRef(self.store, self.name, document_id)


class FakeFirestore:
    """In-memory stand-in for the Firestore client, keyed by 'collection/id'."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.reads = []

    def collection(self, name):
        return FakeCollectionRef(self, name)


class FakeTransport:
    """Records every envelope; batch outcomes map a token to an exception."""

    def __init__(self, error=None, batch_errors=None, batch_error=None):
        self.error = error
        self.batch_errors = batch_errors or {}
        self.batch_error = batch_error
        self.sent = []
        self.multicasts = []

    async def send(self, envelope):
        self.sent.append(envelope)
        if self.error is not None:
            raise self.error
        return f"projects/test/messages/{len(self.sent)}"

    async def send_multicast(self, envelope, tokens):
        self.multicasts.append((envelope, list(tokens)))
        if self.batch_error is not None:
            raise self.batch_error
        responses = []
        for index, token in enumerate(tokens):
            error = self.batch_errors.get(token)
            if error is None:
                responses.append(SimpleNamespace(success=True, message_id=f"msg-{index}", exception=None))
            else:
                responses.append(SimpleNamespace(success=False, message_id=None, exception=error))
        return SimpleNamespace(responses=responses)


def make_documents():
    return {
        'users/owner': {'firstname': 'Ann', 'lastname': 'Lee', 'fcmToken': 'owner-token'},
        'users/liker': {'firstname': 'Bob', 'lastname': ''},
        'users/no-token': {'firstname': 'Cy'},
        'posts/post-1': {'createdBy': 'owner', 'title': 'Hi'},
        'posts/post-2': {'createdBy': 'no-token', 'plainText': 'hello world'},
        'posts/orphan': {'createdBy': 'ghost', 'title': 'Lost'},
    }


@pytest.fixture
def firestore_db():
    return FakeFirestore(make_documents())


@pytest.fixture
def enricher(firestore_db):
    return Enricher(LookupClient(firestore_db))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def dispatcher(transport):
    return Dispatcher(transport)

from typing import Annotated

from fastapi import Depends

from .firebase import get_firebase
from .notifications.dispatcher import Dispatcher
from .notifications.enricher import Enricher
from .notifications.lookup import LookupClient
from .notifications.transport import FcmTransport


def get_lookup_client() -> LookupClient:
    return LookupClient(get_firebase().firestore_db)


def get_enricher(lookup: Annotated[LookupClient, Depends(get_lookup_client)]) -> Enricher:
    return Enricher(lookup)


def get_dispatcher() -> Dispatcher:
    return Dispatcher(FcmTransport(get_firebase().app))

import json
import logging
import threading
from typing import Optional

import firebase_admin
import google.cloud.firestore
from firebase_admin import credentials, firestore

from ..config import settings

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_services: Optional["FirebaseServices"] = None


class FirebaseServices:
    """The Firebase app plus the Firestore client used for lookups."""

    def __init__(self, app: firebase_admin.App):
        self.app = app
        self.firestore_db: google.cloud.firestore.Client = firestore.client(app)


def _load_credential() -> credentials.Certificate:
    cert_json = settings.firebase_secret
    if not cert_json:
        raise ValueError("Environment variable FIREBASE_SECRET is not set")
    cert_dict = json.loads(cert_json)
    # Secrets managers sometimes hand back the JSON double-encoded
    if isinstance(cert_dict, str):
        cert_dict = json.loads(cert_dict)
    return credentials.Certificate(cert_dict)


def _default_app() -> firebase_admin.App:
    try:
        app = firebase_admin.get_app()
        logger.info("Reusing existing Firebase app")
    except ValueError:
        app = firebase_admin.initialize_app(credential=_load_credential())
        logger.info(f"Initialized Firebase app: {app.name}")
    return app


def get_firebase() -> FirebaseServices:
    """
    Return the process-wide Firebase services, initialising them once.

    FastAPI resolves sync dependencies in its threadpool, so the first
    initialisation is serialised behind a lock.
    """
    global _services
    if _services is None:
        with _lock:
            if _services is None:
                _services = FirebaseServices(_default_app())
    return _services

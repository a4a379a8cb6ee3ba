# Firestore-backed store via the Firebase Admin SDK.

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from ..errors import ConfigurationError, StoreUnavailableError
from ..search.types import DEFAULT_ANSWER_FIELDS, AnswerFields, Entry

logger = logging.getLogger("fernbot.store.firestore")

APP_NAME = "fernbot"
REQUIRED = ("FIREBASE_PROJECT_ID", "FIREBASE_PRIVATE_KEY", "FIREBASE_CLIENT_EMAIL")


def service_account_info(settings) -> Dict[str, Any]:
    """Build the service-account dict from FIREBASE_* settings.

    Private keys pasted into env vars usually carry literal ``\\n``; those are
    turned back into newlines.
    """
    key = settings.FIREBASE_PRIVATE_KEY
    return {
        "type": "service_account",
        "project_id": settings.FIREBASE_PROJECT_ID,
        "private_key_id": settings.FIREBASE_PRIVATE_KEY_ID,
        "private_key": key.replace("\\n", "\n") if key else None,
        "client_email": settings.FIREBASE_CLIENT_EMAIL,
        "client_id": settings.FIREBASE_CLIENT_ID,
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
        "client_x509_cert_url": settings.FIREBASE_CLIENT_CERT_URL,
    }


class FirestoreEntryStore:
    def __init__(self, client, app: Optional[firebase_admin.App] = None):
        self.client = client
        self._app = app

    @classmethod
    def from_settings(cls, settings) -> "FirestoreEntryStore":
        missing = [name for name in REQUIRED if not getattr(settings, name, None)]
        if missing:
            raise ConfigurationError(f"Missing Firebase settings: {', '.join(missing)}")
        try:
            cred = credentials.Certificate(service_account_info(settings))
            app = firebase_admin.initialize_app(cred, name=APP_NAME)
        except ValueError as e:
            raise ConfigurationError(f"Invalid Firebase credentials: {e}") from e
        logger.info("Firebase initialized for project %s", settings.FIREBASE_PROJECT_ID)
        return cls(firestore.client(app), app=app)

    def fetch_all(self, collection: str, answer_fields: Optional[AnswerFields] = None) -> List[Entry]:
        fields = answer_fields or DEFAULT_ANSWER_FIELDS
        try:
            docs = list(self.client.collection(collection).stream())
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreUnavailableError(f"Firestore read of '{collection}' failed: {e}") from e
        logger.debug("Fetched %d documents from %s", len(docs), collection)
        return [Entry.from_dict(doc.id, doc.to_dict(), fields) for doc in docs]

    def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None

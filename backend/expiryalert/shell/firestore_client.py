"""Firestore Client - Persistence for per-device preferences.

This module handles all database I/O for reminder and picker preferences.
All I/O is contained here; business logic is in the core module.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from google.cloud import firestore

from ..core.models import CatalogKind, ReminderState


logger = logging.getLogger(__name__)


class StoreUnavailableError(Exception):
    """A preference read failed, so the stored value is unknown."""


_SELECTION_FIELDS = {
    CatalogKind.CATEGORY: "category_ids",
    CatalogKind.LOCATION: "location_ids",
}


@dataclass
class FirestoreConfig:
    """Configuration for Firestore client.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
    """

    project_id: str | None = None
    database: str | None = None


class PreferenceFirestoreClient:
    """Client for persisting device preferences to Firestore.

    Document structure per device:
        devices/{device_key}/
            preferences/reminder: { last_shown_day, updated_at }
            preferences/selection: { category_ids: [...], location_ids: [...] }

    ``device_key`` is the hashed device id.
    """

    def __init__(self, config: FirestoreConfig | None = None) -> None:
        self.config = config or FirestoreConfig()
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.config.project_id:
                kwargs["project"] = self.config.project_id
            if self.config.database:
                kwargs["database"] = self.config.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _preference_ref(self, device_key: str, name: str) -> firestore.DocumentReference:
        return (
            self.client.collection("devices")
            .document(device_key)
            .collection("preferences")
            .document(name)
        )

    # ==================== Reminder State ====================

    def get_reminder_state(self, device_key: str) -> ReminderState | None:
        """Fetch the persisted reminder day marker.

        Args:
            device_key: Hashed device id

        Returns:
            ReminderState if stored, None if never saved

        Raises:
            StoreUnavailableError: If the read failed
        """
        logger.debug("Fetching reminder state for device: %s", device_key[:8])
        try:
            doc = self._preference_ref(device_key, "reminder").get()
            if not doc.exists:
                return None
            data = doc.to_dict() or {}
            return ReminderState(last_shown_day=data.get("last_shown_day"))
        except Exception as e:
            logger.error("Failed to fetch reminder state: %s", str(e))
            raise StoreUnavailableError(str(e)) from e

    def save_reminder_state(self, device_key: str, state: ReminderState) -> bool:
        """Persist the reminder day marker.

        Returns:
            True if successful
        """
        logger.info(
            "Saving reminder state for device %s: %s", device_key[:8], state.last_shown_day
        )
        try:
            data = state.model_dump()
            data["updated_at"] = datetime.now(timezone.utc)
            self._preference_ref(device_key, "reminder").set(data)
            return True
        except Exception as e:
            logger.error("Failed to save reminder state: %s", str(e))
            return False

    # ==================== Picker Selection ====================

    def get_selection(self, device_key: str, kind: CatalogKind) -> frozenset[str] | None:
        """Fetch the selected entry ids for a catalog.

        Returns:
            Selected ids, or None when nothing has been saved (all selected)
        """
        logger.debug("Fetching %s selection for device: %s", kind.value, device_key[:8])
        try:
            doc = self._preference_ref(device_key, "selection").get()
            if not doc.exists:
                return None
            ids = (doc.to_dict() or {}).get(_SELECTION_FIELDS[kind])
            if ids is None:
                return None
            return frozenset(ids)
        except Exception as e:
            logger.error("Failed to fetch selection: %s", str(e))
            return None

    def save_selection(
        self, device_key: str, kind: CatalogKind, selection: frozenset[str]
    ) -> bool:
        """Persist the selected entry ids for one catalog, leaving the other intact."""
        logger.info(
            "Saving %s selection for device %s (%d ids)",
            kind.value, device_key[:8], len(selection),
        )
        try:
            self._preference_ref(device_key, "selection").set(
                {
                    _SELECTION_FIELDS[kind]: sorted(selection),
                    "updated_at": datetime.now(timezone.utc),
                },
                merge=True,
            )
            return True
        except Exception as e:
            logger.error("Failed to save selection: %s", str(e))
            return False

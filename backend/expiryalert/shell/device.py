"""Device Identity - Validation and hashing of client device identifiers.

Preferences are stored per device. Raw device ids never reach the store.
"""

import hashlib
import logging
import uuid


logger = logging.getLogger(__name__)

DEVICE_HEADER = "X-Device-Id"


def validate_device_id(device_id: str | None) -> bool:
    """Check that a device id is a UUID string.

    Args:
        device_id: Identifier sent by the client

    Returns:
        True if format is valid
    """
    if not device_id:
        return False
    try:
        uuid.UUID(device_id)
    except ValueError:
        logger.debug("Rejected malformed device id")
        return False
    return True


def hash_device_id(device_id: str) -> str:
    """Hash a device id into a 32-character Firestore document id.

    Case-insensitive so the same UUID always maps to the same document.
    """
    return hashlib.sha256(device_id.strip().lower().encode()).hexdigest()[:32]

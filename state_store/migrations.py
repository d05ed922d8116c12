"""Schema versions and explicit migrations for durable records.

Every record kind has a current schema version. Records written by older code
are upgraded one version at a time by the functions registered here; nothing
is filled in by silently merging defaults.
"""

import logging
from typing import Any, Callable, Dict, Tuple

from shared.clock import from_epoch_millis
from shared.errors import SchemaVersionError

logger = logging.getLogger(__name__)

MONITOR_KIND = "monitor"
CREDENTIAL_KIND = "credential"
TASK_KIND = "task"

CURRENT_VERSIONS: Dict[str, int] = {
    MONITOR_KIND: 2,
    CREDENTIAL_KIND: 1,
    TASK_KIND: 1,
}

Payload = Dict[str, Any]
Migration = Callable[[Payload], Payload]


def _monitor_v1_to_v2(payload: Payload) -> Payload:
    """Nest the flat v1 profile fields and convert the hook timestamp.

    v1 is the camelCase layout the first deployment persisted: ``creator``,
    ``creatorDisplayName``, ``profileImageUrl`` and ``offlineImageUrl`` at the
    top level, and a status of ``isLive``, ``streamId``, ``thumbnailUrl`` with
    ``discordHookSentOn`` as Unix milliseconds.
    """
    creator = payload["creator"]
    old_status = payload.get("status") or {}

    if old_status.get("isLive"):
        sent_on = old_status.get("discordHookSentOn")
        status = {
            "is_live": True,
            "stream_id": old_status["streamId"],
            "thumbnail_url": old_status.get("thumbnailUrl", ""),
            "notified_at": from_epoch_millis(sent_on).isoformat() if sent_on is not None else None,
        }
    else:
        status = {"is_live": False}

    return {
        "creator_id": creator,
        "profile": {
            "creator_id": creator,
            "display_name": payload.get("creatorDisplayName", ""),
            "profile_image_url": payload.get("profileImageUrl", ""),
            "offline_image_url": payload.get("offlineImageUrl", ""),
        },
        "status": status,
    }


MIGRATIONS: Dict[Tuple[str, int], Migration] = {
    (MONITOR_KIND, 1): _monitor_v1_to_v2,
}


def migrate(kind: str, version: int, payload: Payload) -> Payload:
    """Upgrade a stored payload to the current schema version of its kind.

    Args:
        kind: Record kind (``monitor``, ``credential`` or ``task``)
        version: Schema version the payload was written with
        payload: Decoded payload

    Returns:
        Payload at the current schema version

    Raises:
        SchemaVersionError: If the kind is unknown, the version is newer than
            this code supports, or a step in the chain is missing
    """
    if kind not in CURRENT_VERSIONS:
        raise SchemaVersionError(f"unknown record kind: {kind}")

    target = CURRENT_VERSIONS[kind]
    if version > target:
        raise SchemaVersionError(
            f"{kind} record has schema version {version}, newest supported is {target}"
        )

    while version < target:
        step = MIGRATIONS.get((kind, version))
        if step is None:
            raise SchemaVersionError(f"no migration for {kind} v{version} -> v{version + 1}")
        payload = step(payload)
        version += 1
        logger.info(f"Migrated {kind} record to schema v{version}")

    return payload

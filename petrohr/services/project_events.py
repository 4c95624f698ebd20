"""Live-update events for project operation screens, over Redis pub/sub."""

import json
import logging
from typing import Any

import redis

logger = logging.getLogger(__name__)

ATTENDANCE_UPDATE = "project-attendance-update"
SHIFT_UPDATE = "project-shift-update"


def project_channel(project_id: str) -> str:
    return f"project:{project_id}"


class ProjectEventPublisher:
    """Publishes ``{"event", "action", ...}`` messages on ``project:<id>``.

    Delivery is best-effort: transport failures are logged, never raised.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    def publish(self, project_id: str, event: str, action: str, **payload: Any) -> None:
        message = {"event": event, "action": action, **payload}
        try:
            self.client.publish(project_channel(project_id), json.dumps(message, default=str))
        except redis.RedisError as e:
            logger.warning(
                "Failed to publish project event: %s",
                e,
                extra={"project_id": project_id, "event": event, "action": action},
            )

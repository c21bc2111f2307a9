"""
backend/agenda/services/events.py

Domain event emitter: pushes JSON events onto a Redis list for whatever
consumer the deployment runs (calendar sync, dashboards).

Fire and forget: a Redis outage is logged and never fails the request that
produced the event.
"""

import json
import time
import logging

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:appointments"


def emit_event(event_type: str, payload: dict, redis: Redis | None = None) -> bool:
    """
    Push an event to `events:appointments`.

    Returns True when the event was queued.
    """
    if redis is None:
        from ..redis_client import redis_client as redis

    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis.rpush(EVENTS_QUEUE, json.dumps(event))
    except RedisError as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False

    logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
    return True

"""Cache-aside reads of employees, invalidated on every write.

Two keys are kept per employee: the collection ``employees:all`` and the
entity ``employees:<id>``. Any mutation of an employee, including anything in
its folder tree, deletes both. Backend errors (``redis.RedisError``) are not
caught here and propagate to the caller.
"""

import json
import logging
from typing import List, Optional

import redis
from pydantic import TypeAdapter

from ..core.config import settings
from ..schemas.employee import EmployeeResponse

logger = logging.getLogger(__name__)

ALL_EMPLOYEES_KEY = "employees:all"

_employee_list_adapter = TypeAdapter(List[EmployeeResponse])

# Shared client so the connection pool is reused across requests.
_redis_client: Optional[redis.Redis] = None


def employee_key(employee_id: str) -> str:
    return f"employees:{employee_id}"


def get_redis_client() -> redis.Redis:
    """Get or create the shared Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
    return _redis_client


class EmployeeCache:
    """Read cache over serialized ``EmployeeResponse`` payloads."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 300):
        self.client = client
        self.ttl_seconds = ttl_seconds

    def get_employee(self, employee_id: str) -> Optional[EmployeeResponse]:
        raw = self.client.get(employee_key(employee_id))
        if raw is None:
            return None
        return EmployeeResponse.model_validate_json(raw)

    def set_employee(self, employee: EmployeeResponse) -> None:
        self.client.set(
            employee_key(employee.id),
            employee.model_dump_json(by_alias=True),
            ex=self.ttl_seconds,
        )

    def get_all(self) -> Optional[List[EmployeeResponse]]:
        raw = self.client.get(ALL_EMPLOYEES_KEY)
        if raw is None:
            return None
        return _employee_list_adapter.validate_json(raw)

    def set_all(self, employees: List[EmployeeResponse]) -> None:
        payload = json.dumps([e.model_dump(mode="json", by_alias=True) for e in employees])
        self.client.set(ALL_EMPLOYEES_KEY, payload, ex=self.ttl_seconds)

    def invalidate(self, employee_id: str) -> None:
        """Drop the collection entry and this employee's entry."""
        self.client.delete(ALL_EMPLOYEES_KEY, employee_key(employee_id))
        logger.debug("Employee cache invalidated", extra={"employee_id": employee_id})

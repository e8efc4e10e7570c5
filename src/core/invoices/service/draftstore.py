import json
import logging
from typing import Optional

import redis
from pydantic import ValidationError

from config import settings
from core.invoices.dto.request.invoicedraft import InvoiceDraft

logger = logging.getLogger(__name__)


def create_redis_client() -> redis.Redis:
    return redis.Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        password=settings.REDIS_PASSWORD if settings.REDIS_PASSWORD else None,
        db=settings.REDIS_DB,
        decode_responses=True,
        socket_connect_timeout=5,
    )


class DraftStore:
    """
    Single-slot store for the "new invoice" form.

    One fixed key, last writer wins, no history and no expiry. Anything
    unreadable in the slot is treated as if there were no draft at all.
    """

    def __init__(self, client: redis.Redis, key: str = None):
        self.redis_client = client
        self.key = key or settings.DRAFT_KEY

    def save(self, draft: InvoiceDraft) -> None:
        try:
            self.redis_client.set(self.key, json.dumps(draft.to_storage()))
        except redis.RedisError as e:
            logger.error(f"Could not save invoice draft: {str(e)}")

    def load(self) -> Optional[InvoiceDraft]:
        try:
            raw = self.redis_client.get(self.key)
        except redis.RedisError as e:
            logger.error(f"Could not read invoice draft: {str(e)}")
            return None

        if not raw:
            return None

        try:
            payload = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding corrupted invoice draft (not JSON)")
            return None

        if not isinstance(payload, dict):
            logger.warning("Discarding corrupted invoice draft (not an object)")
            return None

        try:
            return InvoiceDraft.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Discarding invalid invoice draft: {e.error_count()} errors")
            return None

    def clear(self) -> None:
        try:
            self.redis_client.delete(self.key)
        except redis.RedisError as e:
            logger.error(f"Could not clear invoice draft: {str(e)}")


def get_draft_store() -> DraftStore:
    return DraftStore(create_redis_client())

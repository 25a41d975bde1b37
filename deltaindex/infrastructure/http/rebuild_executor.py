"""HTTP adapter for the RebuildExecutor port."""

import logging
from typing import Any

import httpx
import logfire

from deltaindex.domain.index.port.rebuild import RebuildExecutor
from deltaindex.domain.shared.error import RebuildError

logger = logging.getLogger(__name__)


class HttpRebuildExecutor(RebuildExecutor):
    """Asks an indexer service to rebuild a delta index.

    Issues ``POST /indexes/{index}/rebuild`` against the client's base URL with
    a JSON body naming the record type and, for per-record triggers, the
    record id. The indexer decides whether to rebuild inline or enqueue.
    """

    def __init__(self, client: httpx.AsyncClient, id_attribute: str = "id") -> None:
        self._client = client
        self._id_attribute = id_attribute

    async def rebuild(self, record_type: type, instance: Any | None, *, index: str) -> None:
        payload: dict[str, Any] = {"record_type": record_type.__name__, "record_id": None}
        if instance is not None:
            record_id = getattr(instance, self._id_attribute, None)
            payload["record_id"] = None if record_id is None else str(record_id)

        try:
            response = await self._client.post(f"/indexes/{index}/rebuild", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = (
                f"Indexer rejected rebuild of '{index}' for {record_type.__name__}: "
                f"HTTP {e.response.status_code}"
            )
            logger.error(message)
            raise RebuildError(message, index=index) from e
        except httpx.HTTPError as e:
            message = f"Indexer unreachable for rebuild of '{index}': {e}"
            logger.error(message)
            raise RebuildError(message, index=index) from e

        logfire.info("Delta rebuild requested", index=index, **payload)

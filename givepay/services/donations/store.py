"""Document store seam plus the persistence step used after a settled sale."""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

from fastapi.encoders import jsonable_encoder

from givepay.common.logging import logger
from givepay.common.metrics import donation_persist_failures_total
from givepay.services.donations.models import StoredDocument


class DocumentStore(Protocol):
    async def add(self, collection: str, document: dict[str, Any]) -> str: ...


@dataclass(frozen=True)
class PersistResult:
    """Explicit outcome of one document write."""

    ok: bool
    document_id: str | None = None
    error: str | None = None


class SqlDocumentStore:
    """Append-only `DocumentStore` over the `documents` table."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def _insert(self, collection: str, document: dict[str, Any]) -> str:
        with self.session_factory() as db:
            row = StoredDocument(collection=collection, payload=jsonable_encoder(document))
            db.add(row)
            db.commit()
            return row.id

    async def add(self, collection: str, document: dict[str, Any]) -> str:
        return await asyncio.to_thread(self._insert, collection, document)


async def persist_document(
    store: DocumentStore,
    collection: str,
    document: dict[str, Any],
    service_name: str,
) -> PersistResult:
    """Write one document, logging and counting failures instead of raising."""

    try:
        document_id = await store.add(collection, document)
    except Exception as exc:
        logger.error("donation_persist_failed collection=%s error=%s", collection, exc)
        donation_persist_failures_total.labels(service=service_name, collection=collection).inc()
        return PersistResult(ok=False, error=str(exc))
    logger.info("donation_persisted collection=%s document_id=%s", collection, document_id)
    return PersistResult(ok=True, document_id=document_id)

from typing import Any, Literal, Protocol
from uuid import uuid4


Direction = Literal["asc", "desc"]


class DocumentStore(Protocol):
    """Document store keyed by collection and id.

    Records returned by ``get`` and ``query_all`` carry their ``id``. Each call
    is atomic on its own; nothing spans more than one document.
    """

    async def create(self, collection: str, data: dict[str, Any]) -> str: ...

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None: ...

    async def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None: ...

    async def delete(self, collection: str, doc_id: str) -> None: ...

    async def query_all(
        self,
        collection: str,
        order_by: str,
        direction: Direction = "desc",
    ) -> list[dict[str, Any]]: ...


class InMemoryDocumentStore:
    """Process-local store for development and tests."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = str(uuid4())
        self._docs(collection)[doc_id] = {**data, "id": doc_id}
        return doc_id

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._docs(collection).get(doc_id)
        return dict(doc) if doc is not None else None

    async def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        docs = self._docs(collection)
        if doc_id in docs:
            docs[doc_id] = {**docs[doc_id], **partial, "id": doc_id}

    async def delete(self, collection: str, doc_id: str) -> None:
        self._docs(collection).pop(doc_id, None)

    async def query_all(
        self,
        collection: str,
        order_by: str,
        direction: Direction = "desc",
    ) -> list[dict[str, Any]]:
        docs = [dict(doc) for doc in self._docs(collection).values()]
        docs.sort(key=lambda doc: str(doc.get(order_by, "")), reverse=direction == "desc")
        return docs

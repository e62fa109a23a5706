import json
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from roombook.app.core.errors import PersistenceError
from roombook.app.db.store import Direction


_DIRECTIONS = {"asc": "ASC", "desc": "DESC"}


def _row_to_doc(row: Any) -> dict[str, Any]:
    data = row.data if isinstance(row.data, dict) else json.loads(row.data)
    return {**data, "id": str(row.id)}


class PostgresDocumentStore:
    """Document store over the ``document`` jsonb table (see ``sql/010_schema.sql``)."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _execute(self, operation: str, query: str, params: dict[str, Any]):
        try:
            async with self._session.begin():
                return await self._session.execute(text(query), params)
        except (DBAPIError, OSError) as exc:
            logger.exception("Document store {} failed", operation)
            raise PersistenceError() from exc

    async def create(self, collection: str, data: dict[str, Any]) -> str:
        result = await self._execute(
            "create",
            """
            INSERT INTO document (collection, data)
            VALUES (:collection, CAST(:data AS jsonb))
            RETURNING id
            """,
            {"collection": collection, "data": json.dumps(data)},
        )
        return str(result.scalar_one())

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        result = await self._execute(
            "get",
            """
            SELECT id, data
            FROM document
            WHERE collection = :collection
              AND id::text = :id
            """,
            {"collection": collection, "id": doc_id},
        )
        row = result.one_or_none()
        return _row_to_doc(row) if row is not None else None

    async def update(self, collection: str, doc_id: str, partial: dict[str, Any]) -> None:
        await self._execute(
            "update",
            """
            UPDATE document
            SET data = data || CAST(:partial AS jsonb),
                updated_at = now()
            WHERE collection = :collection
              AND id::text = :id
            """,
            {"collection": collection, "id": doc_id, "partial": json.dumps(partial)},
        )

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._execute(
            "delete",
            "DELETE FROM document WHERE collection = :collection AND id::text = :id",
            {"collection": collection, "id": doc_id},
        )

    async def query_all(
        self,
        collection: str,
        order_by: str,
        direction: Direction = "desc",
    ) -> list[dict[str, Any]]:
        if direction not in _DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {direction}")
        result = await self._execute(
            "query",
            f"""
            SELECT id, data
            FROM document
            WHERE collection = :collection
            ORDER BY data ->> :order_by {_DIRECTIONS[direction]}, created_at
            """,
            {"collection": collection, "order_by": order_by},
        )
        return [_row_to_doc(row) for row in result.all()]

"""Repository abstractions for domain services."""

from __future__ import annotations

from typing import Any, Generic, Mapping, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .pagination import PageRequest

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    """Base repository exposing the SQLAlchemy session and paging helpers."""

    #: Public sort property name -> mapped column. The first entry is the tie-breaker.
    sortable_columns: Mapping[str, Any] = {}

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def add(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        await self.session.flush()
        return instance

    def _order_by(self, stmt: Select, request: PageRequest) -> Select:
        clauses = []
        used: set[str] = set()
        for order in request.sort:
            column = self.sortable_columns.get(order.property)
            if column is None:
                raise ValueError(f"No property '{order.property}' found to sort by")
            clauses.append(column.desc() if order.descending else column.asc())
            used.add(order.property)
        if self.sortable_columns:
            key, column = next(iter(self.sortable_columns.items()))
            if key not in used:
                clauses.append(column.asc())
        return stmt.order_by(*clauses)

    async def _paginate(self, stmt: Select, request: PageRequest) -> tuple[Sequence[ModelT], int]:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.session.execute(count_stmt)).scalar() or 0

        query = self._order_by(stmt, request).offset(request.offset).limit(request.size)
        result = await self.session.execute(query)
        return result.scalars().all(), int(total)

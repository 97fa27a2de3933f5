"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Repository — Parent class for all domain repositories.
Provides lookup and insert helpers plus the two primitives the
scheduling core leans on: row-locking reads (``SELECT … FOR UPDATE``)
and status-guarded conditional updates whose
affected row count tells the caller whether it won a race.

Usage:
    class ShiftRepository(BaseRepository[Shift]):
        def __init__(self) -> None:
            super().__init__(Shift)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shiftdesk.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
        for_update: bool = False,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)
            for_update: True이면 트랜잭션 종료까지 행 잠금
                        (Lock the row until the transaction ends)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        if for_update:
            # 잠금 후 최신 값으로 덮어쓰기 — Refresh identity-map copies once locked
            query = query.with_for_update().execution_options(populate_existing=True)

        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record and flush it so generated values are available.
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update_where(
        self,
        db: AsyncSession,
        criteria: Sequence[ColumnElement[bool]],
        values: dict[str, Any],
    ) -> int:
        """조건부 UPDATE를 실행하고 영향받은 행 수를 반환합니다.

        Run a conditional ``UPDATE … WHERE`` and return the affected row
        count. Callers guard on the current status (e.g. ``status =
        'pending'``) and treat anything other than exactly one row as a lost
        race.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            criteria: WHERE 조건 목록 (WHERE clauses)
            values: 갱신할 값 (Column values to set)

        Returns:
            int: 영향받은 행 수 (Number of rows updated)
        """
        result = await db.execute(
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def count(
        self,
        db: AsyncSession,
        *criteria: ColumnElement[bool],
    ) -> int:
        """조건에 맞는 레코드 수 — Count records matching a predicate."""
        query: Select = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        return (await db.execute(query)).scalar() or 0

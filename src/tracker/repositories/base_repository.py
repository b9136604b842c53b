"""Базовый репозиторий: выборки и добавление объектов одной модели."""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.logging import tracker_log as log
from src.tracker.models import Base as SQLAlchemyBaseModel

ModelType = TypeVar("ModelType", bound=SQLAlchemyBaseModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType]):
    """
    Репозиторий модели `model`.

    Методы только формируют запросы и выполняют flush; commit и rollback
    остаются за сервисом, который владеет единицей работы.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    def _select(
        self,
        filters: Sequence[ColumnElement[bool]],
        order_by: Sequence[ColumnElement[Any]] | None,
    ) -> Select[tuple[ModelType]]:
        statement = select(self.model).where(*filters)
        if order_by:
            statement = statement.order_by(*order_by)
        return statement

    async def get_by_id(self, db_session: AsyncSession, *, obj_id: int) -> ModelType | None:
        """Объект по первичному ключу (сначала ищется в identity map сессии)."""
        instance = await db_session.get(self.model, obj_id)
        log.debug(f"{self.model.__name__} ID {obj_id}: {'найден' if instance else 'не найден'}.")
        return instance

    async def get_by_filter_first_or_none(
        self,
        db_session: AsyncSession,
        *filters: ColumnElement[bool],
        order_by: list[ColumnElement[Any]] | None = None,
    ) -> ModelType | None:
        """
        Первый объект, подходящий под все фильтры, или None.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            *filters (ColumnElement[bool]): Условия, объединяемые через AND.
            order_by (list[ColumnElement[Any]] | None): Порядок, определяющий, какой объект "первый".
        """
        result = await db_session.execute(self._select(filters, order_by).limit(1))
        return result.scalars().first()

    async def get_multi_by_filter(
        self,
        db_session: AsyncSession,
        *filters: ColumnElement[bool],
        order_by: list[ColumnElement[Any]] | None = None,
    ) -> Sequence[ModelType]:
        """Все объекты, подходящие под фильтры, в порядке `order_by`."""
        result = await db_session.execute(self._select(filters, order_by))
        return result.scalars().all()

    async def create(self, db_session: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        """
        Добавляет в сессию объект из Pydantic схемы.

        После flush у объекта есть ID и значения по умолчанию из БД, но транзакция не зафиксирована.
        """
        db_obj = self.model(**obj_in.model_dump())
        db_session.add(db_obj)

        await db_session.flush()
        await db_session.refresh(db_obj)

        log.debug(f"{self.model.__name__} (ID: {db_obj.id}) добавлен в сессию.")
        return db_obj

    async def remove(self, db_session: AsyncSession, *, db_obj: ModelType) -> None:
        """Удаляет объект; каскадные связи модели удаляются вместе с ним."""
        await db_session.delete(db_obj)
        await db_session.flush()
        log.debug(f"{self.model.__name__} (ID: {db_obj.id}) помечен на удаление.")

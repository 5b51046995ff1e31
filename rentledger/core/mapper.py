from typing import Iterable, Optional, Type, TypeVar

from pydantic import BaseModel

from .exceptions import NotFound

T = TypeVar("T", bound=BaseModel)


class ORMMapper:
    """
    Builds response schemas from ORM rows.

    Rows come from an ``AsyncSession``, where lazy loading is not available,
    so every relationship the schema reads must already be eager-loaded by
    the repository query.
    """

    @staticmethod
    def one(row, schema: Type[T]) -> T:
        return schema.model_validate(row)

    @staticmethod
    def found(row: Optional[object], schema: Type[T], entity: str) -> T:
        # Absent and foreign rows both arrive here as None.
        if row is None:
            raise NotFound(entity)
        return schema.model_validate(row)

    @staticmethod
    def many(rows: Iterable, schema: Type[T]) -> list[T]:
        return [schema.model_validate(row) for row in rows]

"""Базовая схема Pydantic для всех схем трекера."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Базовая схема Pydantic: чтение из ORM-объектов, обрезка пробелов в строках."""

    model_config = ConfigDict(
        from_attributes=True,  # Позволяет создавать схемы из ORM моделей
        str_strip_whitespace=True,  # Заметки и названия без пробелов по краям
        extra="ignore",  # Игнорировать лишние поля при парсинге
    )

"""
Базовая схема: camelCase в JSON, обрезка пробелов во входных строках
"""
from typing import Any

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Поля в Python - snake_case, в JSON - camelCase (isAnonymous, imageUrl)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

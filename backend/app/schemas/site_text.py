"""
Схемы текстов сайта
"""
from typing import List, Literal

from .common import CamelModel


class SiteTextField(CamelModel):
    key: str
    label: str
    type: Literal["text", "textarea"]
    value: str
    default: str


class SiteTextGroup(CamelModel):
    group: str
    fields: List[SiteTextField]

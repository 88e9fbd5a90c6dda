from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from ggjson.options import DEFAULT_TYPE_SEPARATOR, DEFAULT_TYPE_TAG


class DeserializeConfigDTO(BaseModel):
    type_tag: str = Field(default=DEFAULT_TYPE_TAG, min_length=1)
    type_separator: str = Field(default=DEFAULT_TYPE_SEPARATOR, min_length=1, max_length=1)
    allow_fully_qualified_types: bool = False
    default_aliases: bool = True
    modules: List[str] = []
    aliases: Dict[str, str] = {}

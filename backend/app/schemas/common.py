"""Shared schema building blocks"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    """Pagination metadata returned with every list"""
    current: int
    total: int
    has_next: bool
    has_prev: bool


class MessageResponse(CamelModel):
    """Plain acknowledgement"""
    message: str

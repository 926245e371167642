from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DTO(BaseModel):
    """
    Base for every wire DTO.

    Python code uses snake_case attributes matching the ORM models; JSON uses
    camelCase (`designationFr`, `plannedItemId`). Both spellings are accepted on
    input. Business fields are optional at this level: required-ness is enforced
    by the validation pipeline so that create and update report missing fields the
    same way.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )


ItemT = TypeVar("ItemT")


class Page(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    total: int
    page: int
    size: int
    pages: int


class ExistsResponse(BaseModel):
    exists: bool


class CountResponse(BaseModel):
    count: int


class QuantityResponse(DTO):
    value: float

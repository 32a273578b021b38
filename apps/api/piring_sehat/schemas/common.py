"""Shared response envelopes and field types."""

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, StringConstraints

DataT = TypeVar("DataT")

# Surrounding whitespace is dropped before the length check, so "   " is rejected.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class MessageResponse(BaseModel):
    message: str

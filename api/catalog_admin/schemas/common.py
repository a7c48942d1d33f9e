"""Response envelopes shared by the routers."""
from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    total: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None

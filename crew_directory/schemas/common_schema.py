# crew_directory/schemas/common_schema.py
from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import Generic, TypeVar

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """成功回應的共用外層結構: {success, timestamp, data}"""
    success: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: T

class MessageOut(BaseModel):
    success: bool = True
    message: str

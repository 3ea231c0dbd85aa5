# buildhub/schemas/common.py
from pydantic import BaseModel


class CountResponse(BaseModel):
    success: bool = True
    message: str
    updated_count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str

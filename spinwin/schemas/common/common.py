# spinwin/schemas/common.py
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    store: str
    version: str

"""
Pydantic schemas for permissions.
"""
from pydantic import BaseModel, ConfigDict


class PermissionResponse(BaseModel):
    """Permission as listed in catalogues and group details."""
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)

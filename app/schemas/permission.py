import uuid
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, examples=["tresorier"])
    description: Optional[str] = Field(default=None, max_length=255)


class RoleResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class PermissionGrant(BaseModel):
    resource: str = Field(..., max_length=50)
    permission: Literal["read", "write"]
    granted: bool = True


class PermissionGrantResponse(PermissionGrant):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class PermissionSetRequest(BaseModel):
    permissions: list[PermissionGrant]


class RoleAssignRequest(BaseModel):
    user_id: uuid.UUID

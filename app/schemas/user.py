import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.user import Role


# 관리자 role 변경 요청용 (SUPERADMIN / DELETED 지정은 라우터에서 거부)
class RoleUpdate(BaseModel):
    role: Role


class LinkMembreRequest(BaseModel):
    membre_id: uuid.UUID | None = None


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    role: Role
    phone: str | None
    membre_id: uuid.UUID | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

from pydantic import BaseModel

class LoginIn(BaseModel):
    # missing credentials are an authentication failure, not a schema error
    email: str | None = None
    password: str | None = None

class SessionUserOut(BaseModel):
    id: str
    email: str
    name: str
    role: str
    department: str | None
    organization_id: str | None
    organization_name: str | None
    permissions: list[str]
    can_access_performance: bool

class LoginOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUserOut

class SessionOut(BaseModel):
    user: SessionUserOut
    backend_access_token: str | None = None

class SessionUpdateIn(BaseModel):
    name: str

class PermissionsOut(BaseModel):
    role: str
    display_role: str
    permissions: list[str]
    can_access_performance: bool
    can_manage_all_departments: bool
    can_manage_own_department: bool
    invitable_roles: list[str]
    task_board: dict

from pydantic import BaseModel, ConfigDict


class PermissionResponse(BaseModel):
    permission_id: int
    code: str
    module_id: int
    operation_id: int
    module_code: str
    operation_code: str

    model_config = ConfigDict(from_attributes=True)

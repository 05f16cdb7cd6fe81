from typing import Any, List, Optional, Union
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """錯誤詳情"""
    field: str
    message: str
    type: str


class ErrorInfo(BaseModel):
    """錯誤資訊"""
    code: str
    message: str
    details: Optional[Union[List[ErrorDetail], Any]] = None


class ErrorResponse(BaseModel):
    """錯誤回應"""
    status: str = "error"
    error: ErrorInfo

    class Config:
        json_schema_extra = {
            "example": {
                "status": "error",
                "error": {
                    "code": "PROFILE_CONTRACT_VIOLATION",
                    "message": "vehicles has 2 entries but vehicle_count is 1",
                    "details": {"field": "vehicles", "length": 2, "count": 1}
                }
            }
        }

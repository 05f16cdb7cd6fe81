from typing import Any, Optional


class AppException(Exception):
    """應用程式基礎例外"""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationException(AppException):
    """資料驗證錯誤"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=422,
            details=details
        )


class BusinessException(AppException):
    """業務邏輯錯誤"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            code="BUSINESS_ERROR",
            message=message,
            status_code=400,
            details=details
        )


class ProfileContractException(ValidationException):
    """呼叫端傳入的 QuoteProfile 違反不變式（計數為負、陣列長度與計數不符）"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, details=details)
        self.code = "PROFILE_CONTRACT_VIOLATION"


class RuleTableException(AppException):
    """規則表載入失敗"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            code="RULE_TABLE_ERROR",
            message=message,
            status_code=500,
            details=details
        )


class CoverageDocumentException(ValidationException):
    """保單資料無法辨識（不支援的險種，或欄位格式無法轉換）"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, details=details)
        self.code = "INVALID_COVERAGE_DOCUMENT"

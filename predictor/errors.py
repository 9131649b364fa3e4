"""Prediction error taxonomy and the JSON envelopes they are rendered as.

Every failure of the predict pipeline is raised as a ``PredictionError``
subclass and converted to a structured response by the handlers registered in
``predictor.main``. Nothing reaches the client as an unstructured fault.
"""

from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from predictor.utils.logger import get_logger

logger = get_logger()


class PredictionError(Exception):
    """Base class for failures surfaced to the client."""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "예측 분석 중 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            content["details"] = self.details
        return content


class InvalidInput(PredictionError):
    """Client-correctable, field-level validation failure."""

    status_code = 400
    code = "invalid_input"
    message = "입력 데이터가 올바르지 않습니다."

    def __init__(self, field_errors: List[Dict[str, Any]]):
        super().__init__(details=field_errors)

    @property
    def field_errors(self) -> List[Dict[str, Any]]:
        return self.details


class MisconfiguredService(PredictionError):
    """The API credential is missing from the deployment."""

    code = "misconfigured_service"
    message = "OpenAI API 키가 설정되지 않았습니다."


class UpstreamError(PredictionError):
    """The completion endpoint failed, timed out or was unreachable."""

    code = "upstream_error"
    message = "AI 분석 중 오류가 발생했습니다."

    def __init__(self, status: Optional[int], body: str):
        self.upstream_status = status
        self.body = body
        super().__init__(details={"upstreamStatus": status, "body": body})


class ResponseParseError(PredictionError):
    """Model content was empty or not JSON despite JSON mode."""

    code = "response_parse_error"
    message = "AI 응답 JSON 파싱 실패"

    def __init__(self, raw_response: str, message: Optional[str] = None):
        self.raw_response = raw_response
        super().__init__(message=message)

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["rawResponse"] = self.raw_response
        return content


class ResponseShapeError(PredictionError):
    """Model JSON parsed but one or more required groups are missing or malformed."""

    code = "response_shape_error"
    message = "AI 응답 형식이 올바르지 않습니다."

    def __init__(self, missing_groups: List[str], raw_response: str):
        self.missing_groups = missing_groups
        self.raw_response = raw_response
        super().__init__(details={"missingGroups": missing_groups})

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["rawResponse"] = self.raw_response
        return content


async def prediction_error_handler(request: Request, exc: PredictionError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "predict.unhandled",
        extra={"path": request.url.path, "error": str(exc), "error_type": type(exc).__name__},
        exc_info=exc,
    )
    fallback = PredictionError(details=str(exc) or type(exc).__name__)
    return JSONResponse(status_code=fallback.status_code, content=fallback.to_content())

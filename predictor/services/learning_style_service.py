"""Learning style analysis - one OpenAI JSON-mode call per submission"""

import json
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import openai
from openai import AsyncOpenAI

from predictor.config import Settings
from predictor.errors import (
    MisconfiguredService,
    ResponseParseError,
    ResponseShapeError,
    UpstreamError,
)
from predictor.middleware.correlation import get_correlation_id
from predictor.schemas.prediction import AnalysisResult, Submission, find_shape_problems
from predictor.services.prompts import build_messages
from predictor.utils.logger import get_logger

logger = get_logger()

ClientFactory = Callable[[Settings], AsyncOpenAI]

# Raw model text kept in logs for parse/shape failures
RAW_LOG_LIMIT = 2000


def default_client_factory(settings: Settings) -> AsyncOpenAI:
    """A request-scoped client. SDK retries are off: one attempt per request."""
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url or None,
        timeout=settings.openai_timeout_seconds,
        max_retries=0,
    )


def utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-10-19T08:30:00.123Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _reject_constant(name: str):
    # NaN / Infinity / -Infinity are not JSON and would turn into null on the way out
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def _extract_content(response: Any) -> Optional[str]:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


class LearningStyleAnalyzer:
    """Turns a validated Submission into an AnalysisResult via the completion API"""

    def __init__(self, settings: Settings, client_factory: ClientFactory = default_client_factory):
        self.settings = settings
        self.client_factory = client_factory

    async def analyze(self, submission: Submission) -> AnalysisResult:
        if not self.settings.has_openai_credentials:
            logger.error(
                "predict.misconfigured",
                extra={"correlation_id": get_correlation_id(), "error": "OPENAI_API_KEY is not set"},
            )
            raise MisconfiguredService()

        messages = build_messages(submission)
        raw_text = await self._complete(messages)
        groups = self._parse(raw_text)

        return AnalysisResult(
            studentName=submission.name,
            sajuAnalysis=groups["sajuAnalysis"],
            mbtiAnalysis=groups["mbtiAnalysis"],
            learningStyle=groups["learningStyle"],
            studyRecommendations=groups["studyRecommendations"],
            personalizedTips=groups["personalizedTips"],
            timestamp=utc_timestamp(),
        )

    async def _complete(self, messages: list[dict]) -> str:
        model = self.settings.openai_model
        cid = get_correlation_id()
        start = time.monotonic()
        logger.info("predict.upstream_call", extra={"correlation_id": cid, "service": "openai", "model": model})

        try:
            async with self.client_factory(self.settings) as client:
                response = await client.chat.completions.create(
                    model=model,
                    messages=messages,
                    max_tokens=self.settings.openai_max_tokens,
                    response_format={"type": "json_object"},  # Force JSON response
                )
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            logger.error(
                "predict.upstream_error",
                extra={"correlation_id": cid, "service": "openai", "upstream_status": e.status_code, "error": body[:500]},
            )
            raise UpstreamError(e.status_code, body) from e
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass
            logger.error(
                "predict.upstream_error",
                extra={"correlation_id": cid, "service": "openai", "error": str(e), "error_type": type(e).__name__},
            )
            raise UpstreamError(None, str(e)) from e
        except openai.APIError as e:
            # Malformed response envelope and other SDK-side failures
            status = getattr(e, "status_code", None)
            logger.error(
                "predict.upstream_error",
                extra={
                    "correlation_id": cid,
                    "service": "openai",
                    "upstream_status": status,
                    "error": str(e)[:500],
                    "error_type": type(e).__name__,
                },
            )
            raise UpstreamError(status, str(e)) from e

        content = _extract_content(response)
        duration_ms = round((time.monotonic() - start) * 1000)
        logger.info(
            "predict.upstream_done",
            extra={"correlation_id": cid, "service": "openai", "model": model, "duration_ms": duration_ms},
        )

        if not content:
            logger.error(
                "predict.empty_response",
                extra={"correlation_id": cid, "raw_response": repr(response)[:RAW_LOG_LIMIT]},
            )
            raise ResponseParseError("", message="AI 응답을 파싱할 수 없습니다.")
        return content

    def _parse(self, raw_text: str) -> dict:
        cid = get_correlation_id()
        try:
            parsed = json.loads(raw_text, parse_constant=_reject_constant)
        except ValueError as e:  # JSONDecodeError is a subclass
            logger.error(
                "predict.parse_error",
                extra={"correlation_id": cid, "error": str(e), "raw_response": raw_text[:RAW_LOG_LIMIT]},
            )
            raise ResponseParseError(raw_text) from e

        problems = find_shape_problems(parsed)
        if problems:
            logger.error(
                "predict.shape_error",
                extra={"correlation_id": cid, "missing_groups": problems, "raw_response": raw_text[:RAW_LOG_LIMIT]},
            )
            raise ResponseShapeError(problems, raw_text)
        return parsed

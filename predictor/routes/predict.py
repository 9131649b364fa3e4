"""Prediction routes - birth data + MBTI in, five-section learning style report out"""

from fastapi import APIRouter, Depends, Request

from predictor.config import Settings, get_settings
from predictor.errors import InvalidInput
from predictor.middleware.correlation import get_correlation_id
from predictor.schemas.prediction import AnalysisResult, validate_submission
from predictor.schemas.report import FormOptions, build_form_options
from predictor.services.learning_style_service import (
    ClientFactory,
    LearningStyleAnalyzer,
    default_client_factory,
)
from predictor.utils.logger import get_logger

router = APIRouter(prefix="/api/predict", tags=["Prediction"])
logger = get_logger()


def get_client_factory() -> ClientFactory:
    """Seam for swapping the OpenAI client (tests, alternative gateways)."""
    return default_client_factory


def get_analyzer(
    settings: Settings = Depends(get_settings),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> LearningStyleAnalyzer:
    return LearningStyleAnalyzer(settings, client_factory)


@router.post("", response_model=AnalysisResult)
async def predict(
    request: Request,
    analyzer: LearningStyleAnalyzer = Depends(get_analyzer),
) -> AnalysisResult:
    """
    Validate the submission, ask the model for a saju + MBTI learning style
    analysis and return it.

    Errors are raised as PredictionError subclasses and rendered by the
    handlers registered in predictor.main:
    - 400 invalid_input with per-field details
    - 500 misconfigured_service / upstream_error / response_parse_error / response_shape_error
    """
    cid = get_correlation_id()

    try:
        raw_input = await request.json()
    except ValueError:
        logger.warning("predict.invalid_body", extra={"correlation_id": cid})
        raise InvalidInput([
            {"path": [], "message": "요청 본문이 올바른 JSON이 아닙니다.", "code": "json_invalid"}
        ])

    try:
        submission = validate_submission(raw_input)
    except InvalidInput as e:
        logger.warning(
            "predict.invalid_input",
            extra={"correlation_id": cid, "field_errors": [".".join(err["path"]) for err in e.field_errors]},
        )
        raise

    logger.info(
        "predict.started",
        extra={"correlation_id": cid, "mbti": submission.personalityCode},
    )
    result = await analyzer.analyze(submission)
    logger.info("predict.completed", extra={"correlation_id": cid})
    return result


@router.get("/options", response_model=FormOptions)
async def form_options() -> FormOptions:
    """Select-box values and report sections for the submission form."""
    return build_form_options()

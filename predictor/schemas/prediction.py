"""
Pydantic schemas for the learning style prediction
Defines the Submission input contract and the AnalysisResult output shape
"""
from typing import Any, Dict, List, Literal, get_args
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from predictor.errors import InvalidInput


Gender = Literal["male", "female"]
BirthPeriod = Literal["AM", "PM"]
CalendarType = Literal["solar", "lunar"]
MbtiType = Literal[
    "INTJ", "INTP", "ENTJ", "ENTP",
    "INFJ", "INFP", "ENFJ", "ENFP",
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",
    "ISTP", "ISFP", "ESTP", "ESFP",
]

GENDERS = get_args(Gender)
BIRTH_PERIODS = get_args(BirthPeriod)
CALENDAR_TYPES = get_args(CalendarType)
MBTI_TYPES = get_args(MbtiType)

# Shown when a field is missing or empty
REQUIRED_MESSAGES = {
    "name": "이름을 입력해주세요",
    "gender": "성별을 선택해주세요",
    "birthYear": "출생년도를 선택해주세요",
    "birthMonth": "출생월을 선택해주세요",
    "birthDay": "출생일을 선택해주세요",
    "birthHour": "출생시를 선택해주세요",
    "birthPeriod": "오전/오후를 선택해주세요",
    "calendarType": "양력/음력을 선택해주세요",
    "personalityCode": "MBTI를 선택해주세요",
}

ALLOWED_VALUES = {
    "gender": GENDERS,
    "birthPeriod": BIRTH_PERIODS,
    "calendarType": CALENDAR_TYPES,
    "personalityCode": MBTI_TYPES,
}

# Older clients post the personality code as "mbti"
LEGACY_ALIASES = {"mbti": "personalityCode"}


# ========== Input ==========
class Submission(BaseModel):
    """Validated student record used to build the model prompt"""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    gender: Gender
    birthYear: str = Field(..., min_length=1)
    birthMonth: str = Field(..., min_length=1)
    birthDay: str = Field(..., min_length=1)
    birthHour: str = Field(..., min_length=1)
    birthPeriod: BirthPeriod
    calendarType: CalendarType
    personalityCode: MbtiType


def _describe(error: Dict[str, Any], sent_as: Dict[str, str]) -> Dict[str, Any]:
    loc = [str(part) for part in error.get("loc", ())]
    field = loc[0] if loc else ""
    kind = error.get("type", "")

    # Point at the key the client actually sent
    if field in sent_as:
        loc[0] = sent_as[field]

    if kind in ("missing", "string_too_short") or error.get("input") is None:
        message = REQUIRED_MESSAGES.get(field, error.get("msg", ""))
    elif kind == "literal_error" and field in ALLOWED_VALUES:
        message = f"허용되지 않는 값입니다. 가능한 값: {', '.join(ALLOWED_VALUES[field])}"
    elif kind == "string_type":
        message = "문자열 값이어야 합니다."
    else:
        message = error.get("msg", "")

    return {"path": loc, "message": message, "code": kind}


def validate_submission(raw_input: Any) -> Submission:
    """
    Check presence and enumeration membership of every Submission field.

    Raises InvalidInput with one {path, message, code} descriptor per failing
    field. Values are not coerced: a valid record comes back unchanged.
    """
    if not isinstance(raw_input, dict):
        raise InvalidInput([
            {"path": [], "message": "요청 본문은 JSON 객체여야 합니다.", "code": "invalid_type"}
        ])

    data = dict(raw_input)
    sent_as = {}
    for legacy, field in LEGACY_ALIASES.items():
        if field not in data and legacy in data:
            data[field] = data[legacy]
            sent_as[field] = legacy

    try:
        return Submission.model_validate(data)
    except ValidationError as e:
        raise InvalidInput([_describe(err, sent_as) for err in e.errors()]) from e


# ========== Output ==========
# Top-level groups the model must return, with the JSON type each must have
REQUIRED_GROUPS: Dict[str, type] = {
    "sajuAnalysis": dict,
    "mbtiAnalysis": dict,
    "learningStyle": dict,
    "studyRecommendations": dict,
    "personalizedTips": list,
}


class AnalysisResult(BaseModel):
    """
    Report returned to the caller.

    The group contents are whatever the model produced; their inner fields
    (fourPillars, cognitiveFunction, strengths, methods, ...) are requested by
    the prompt but not enforced here.
    """
    studentName: str
    sajuAnalysis: Dict[str, Any]
    mbtiAnalysis: Dict[str, Any]
    learningStyle: Dict[str, Any]
    studyRecommendations: Dict[str, Any]
    personalizedTips: List[Any]
    timestamp: str


def find_shape_problems(parsed: Any) -> List[str]:
    """Return the required groups that are absent or of the wrong JSON type."""
    if not isinstance(parsed, dict):
        return list(REQUIRED_GROUPS)
    return [
        group for group, expected in REQUIRED_GROUPS.items()
        if not isinstance(parsed.get(group), expected)
    ]

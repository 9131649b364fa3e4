"""Report sections and form options consumed by the client form"""
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from predictor.schemas.prediction import (
    AnalysisResult,
    BIRTH_PERIODS,
    CALENDAR_TYPES,
    GENDERS,
    MBTI_TYPES,
)

EARLIEST_BIRTH_YEAR = 1955


class ReportSection(str, Enum):
    """Active-section selector of the report view"""
    SAJU = "sajuAnalysis"
    MBTI = "mbtiAnalysis"
    LEARNING_STYLE = "learningStyle"
    RECOMMENDATIONS = "recommendations"
    TIPS = "tips"


DEFAULT_SECTION = ReportSection.SAJU

SECTION_LABELS = {
    ReportSection.SAJU: "사주 분석",
    ReportSection.MBTI: "MBTI 분석",
    ReportSection.LEARNING_STYLE: "학습 스타일",
    ReportSection.RECOMMENDATIONS: "학습 추천",
    ReportSection.TIPS: "맞춤 조언",
}

# Section key -> AnalysisResult attribute it renders
SECTION_SOURCES = {
    ReportSection.SAJU: "sajuAnalysis",
    ReportSection.MBTI: "mbtiAnalysis",
    ReportSection.LEARNING_STYLE: "learningStyle",
    ReportSection.RECOMMENDATIONS: "studyRecommendations",
    ReportSection.TIPS: "personalizedTips",
}


class SectionOption(BaseModel):
    id: str
    label: str


class FormOptions(BaseModel):
    """Select-box values for the multi-step submission form"""
    years: List[str]
    months: List[str]
    days: List[str]
    hours: List[str]
    genders: List[str]
    birthPeriods: List[str]
    calendarTypes: List[str]
    mbtiTypes: List[str]
    sections: List[SectionOption]
    defaultSection: str


def _two_digit_range(count: int) -> List[str]:
    return [str(i).zfill(2) for i in range(1, count + 1)]


def build_form_options(current_year: Optional[int] = None) -> FormOptions:
    current_year = current_year or datetime.now().year
    return FormOptions(
        years=[str(y) for y in range(current_year, EARLIEST_BIRTH_YEAR - 1, -1)],
        months=_two_digit_range(12),
        days=_two_digit_range(31),
        hours=_two_digit_range(12),  # paired with AM/PM
        genders=list(GENDERS),
        birthPeriods=list(BIRTH_PERIODS),
        calendarTypes=list(CALENDAR_TYPES),
        mbtiTypes=list(MBTI_TYPES),
        sections=[SectionOption(id=s.value, label=SECTION_LABELS[s]) for s in ReportSection],
        defaultSection=DEFAULT_SECTION.value,
    )


def section_payload(result: AnalysisResult, section: ReportSection = DEFAULT_SECTION) -> Any:
    """Part of the report rendered under the given section"""
    return getattr(result, SECTION_SOURCES[ReportSection(section)])

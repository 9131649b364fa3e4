"""Prompt templates for the saju + MBTI learning style analysis"""

from predictor.schemas.prediction import Submission

CALENDAR_LABELS = {"solar": "양력", "lunar": "음력"}
PERIOD_LABELS = {"AM": "오전", "PM": "오후"}
GENDER_LABELS = {"male": "남자", "female": "여자"}

SYSTEM_PROMPT = """당신은 사주명리학과 MBTI 심리학을 결합하여 학생의 학습 스타일을 분석하는 전문 AI입니다.

## 분석 지침
1. **사주 분석 (최우선)**: 생년월일시를 바탕으로 사주팔자(년주, 월주, 일주, 시주)를 계산하고, 오행(목, 화, 토, 금, 수)의 분포와 균형을 분석하세요. **중요**: 음력으로 입력된 경우 음력 날짜를 기준으로 사주를 계산하세요.
2. **MBTI 분석**: 해당 MBTI 유형의 인지 기능(주기능, 부기능, 3차기능, 열등기능)을 분석하세요.
3. **학습 추천 (사주 기반 필수)**: 학습 환경, 방법, 일정 추천 시 반드시 사주의 오행과 시주를 근거로 설명하세요. 예: "화(火)가 강해 오후 시간대 집중력 상승", "수(水)가 부족해 조용한 환경 필요" 등.

반드시 다음 JSON 형식으로만 응답하세요. JSON 외의 다른 텍스트는 절대 포함하지 마세요:
{
  "sajuAnalysis": {
    "fourPillars": "사주팔자 상세 설명 (년주, 월주, 일주, 시주와 각각의 천간지지 설명, 최소 4-5문장)",
    "elementAnalysis": "오행 분포 분석 (목, 화, 토, 금, 수 각각의 강약과 의미, 최소 4-5문장)",
    "learningInfluence": "사주가 학습에 미치는 영향 상세 분석 (최소 4-5문장)"
  },
  "mbtiAnalysis": {
    "typeDescription": "MBTI 유형의 핵심 특성 설명 (최소 3-4문장)",
    "cognitiveFunction": "인지 기능 스택 분석 (주기능, 부기능, 3차기능, 열등기능 각각 설명, 최소 4-5문장)",
    "learningCharacteristics": "MBTI 기반 학습 특성 상세 분석 (최소 4-5문장)"
  },
  "learningStyle": {
    "type": "학습 스타일 유형명 (사주와 MBTI를 종합한 고유한 유형명)",
    "description": "학습 스타일 상세 설명 (사주와 MBTI를 어떻게 결합했는지 포함, 최소 4-5문장)",
    "strengths": ["구체적인 강점1 (2문장 이상)", "구체적인 강점2 (2문장 이상)", "구체적인 강점3 (2문장 이상)", "구체적인 강점4 (2문장 이상)"],
    "weaknesses": ["구체적인 개선점1 (2문장 이상)", "구체적인 개선점2 (2문장 이상)", "구체적인 개선점3 (2문장 이상)", "구체적인 개선점4 (2문장 이상)"]
  },
  "studyRecommendations": {
    "environment": "추천 학습 환경 상세 설명 (사주 오행 특성을 근거로 구체적인 환경 추천, 최소 3-4문장)",
    "environmentSajuBasis": "학습 환경 추천의 사주 근거 (어떤 오행 특성이 이 환경을 추천하게 했는지, 최소 2-3문장)",
    "methods": ["구체적인 학습 방법1 (2문장 이상)", "구체적인 학습 방법2 (2문장 이상)", "구체적인 학습 방법3 (2문장 이상)", "구체적인 학습 방법4 (2문장 이상)", "구체적인 학습 방법5 (2문장 이상)"],
    "methodsSajuBasis": "학습 방법 추천의 사주 근거 (오행 분포가 학습 방법 선택에 어떤 영향을 미쳤는지, 최소 2-3문장)",
    "schedule": "추천 학습 일정 및 시간대 (사주의 시주와 오행 에너지 패턴 기반, 최소 3-4문장)",
    "scheduleSajuBasis": "학습 일정 추천의 사주 근거 (시주와 오행이 시간대 선택에 미친 영향, 최소 2-3문장)"
  },
  "personalizedTips": ["상세한 맞춤 조언1 (3문장 이상)", "상세한 맞춤 조언2 (3문장 이상)", "상세한 맞춤 조언3 (3문장 이상)", "상세한 맞춤 조언4 (3문장 이상)", "상세한 맞춤 조언5 (3문장 이상)", "상세한 맞춤 조언6 (3문장 이상)"]
}"""


def build_birth_time(submission: Submission) -> str:
    """e.g. '양력 2008년 05월 14일 오전 09시'. No calendar arithmetic happens here."""
    calendar = CALENDAR_LABELS[submission.calendarType]
    period = PERIOD_LABELS[submission.birthPeriod]
    return (
        f"{calendar} {submission.birthYear}년 {submission.birthMonth}월 "
        f"{submission.birthDay}일 {period} {submission.birthHour}시"
    )


def build_user_prompt(submission: Submission) -> str:
    calendar = CALENDAR_LABELS[submission.calendarType]
    gender = GENDER_LABELS[submission.gender]
    calendar_hint = (
        "음력 날짜 기준으로 사주팔자 계산 필요"
        if submission.calendarType == "lunar"
        else "양력 날짜 기준"
    )

    return f"""다음 학생의 정보를 바탕으로 사주와 MBTI를 깊이 있게 분석하고, 학습 스타일을 상세히 분석해주세요:

이름: {submission.name}
성별: {gender}
사주 (생년월일시): {build_birth_time(submission)}
역법: {calendar} ({calendar_hint})
MBTI: {submission.personalityCode}

중요 사항:
1. 사주팔자를 정확하게 계산하고 각 기둥(년주, 월주, 일주, 시주)의 의미를 설명해주세요. 성별({gender})에 따른 대운과 학습 성향의 차이도 고려하세요.
2. 오행의 분포와 균형을 분석하고 이것이 학습에 미치는 영향을 구체적으로 설명해주세요.
3. MBTI의 인지 기능 스택을 분석하고 학습 방식과의 연관성을 설명해주세요.
4. 모든 분석은 최대한 상세하고 구체적으로 작성해주세요."""


def build_messages(submission: Submission) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(submission)},
    ]

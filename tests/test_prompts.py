from predictor.schemas.prediction import REQUIRED_GROUPS, validate_submission
from predictor.services.prompts import (
    SYSTEM_PROMPT,
    build_birth_time,
    build_messages,
    build_user_prompt,
)


def test_birth_time_solar_morning(valid_payload):
    submission = validate_submission(valid_payload)
    assert build_birth_time(submission) == "양력 2008년 05월 14일 오전 09시"


def test_birth_time_lunar_afternoon(valid_payload):
    valid_payload.update(calendarType="lunar", birthPeriod="PM", birthHour="3")
    submission = validate_submission(valid_payload)
    assert build_birth_time(submission) == "음력 2008년 05월 14일 오후 3시"


def test_user_prompt_embeds_submission(valid_payload):
    prompt = build_user_prompt(validate_submission(valid_payload))

    assert "이름: 민수" in prompt
    assert "성별: 남자" in prompt
    assert "MBTI: INTJ" in prompt
    assert "역법: 양력 (양력 날짜 기준)" in prompt


def test_user_prompt_lunar_hint(valid_payload):
    valid_payload.update(calendarType="lunar", gender="female")
    prompt = build_user_prompt(validate_submission(valid_payload))

    assert "성별: 여자" in prompt
    assert "음력 날짜 기준으로 사주팔자 계산 필요" in prompt


def test_system_prompt_names_every_group():
    for group in REQUIRED_GROUPS:
        assert f'"{group}"' in SYSTEM_PROMPT


def test_messages_are_system_then_user(valid_payload):
    messages = build_messages(validate_submission(valid_payload))
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert messages[1]["role"] == "user"

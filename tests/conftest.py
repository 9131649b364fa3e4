"""Shared fixtures: a valid submission, a complete model answer and a fake OpenAI client."""

import json

import pytest
from fastapi.testclient import TestClient

from predictor.config import Settings, get_settings
from predictor.main import app
from predictor.routes.predict import get_client_factory

from fakes import FakeOpenAI


@pytest.fixture
def valid_payload():
    return {
        "name": "민수",
        "gender": "male",
        "birthYear": "2008",
        "birthMonth": "05",
        "birthDay": "14",
        "birthHour": "09",
        "birthPeriod": "AM",
        "calendarType": "solar",
        "personalityCode": "INTJ",
    }


@pytest.fixture
def complete_analysis():
    return {
        "sajuAnalysis": {
            "fourPillars": "무자년 정사월 갑인일 기사시의 사주입니다.",
            "elementAnalysis": "목과 화가 강하고 금이 약합니다.",
            "learningInfluence": "집중력이 오전에 높습니다.",
        },
        "mbtiAnalysis": {
            "typeDescription": "INTJ는 전략가 유형입니다.",
            "cognitiveFunction": "Ni-Te-Fi-Se 스택입니다.",
            "learningCharacteristics": "체계적인 독학을 선호합니다.",
        },
        "learningStyle": {
            "type": "전략적 몰입형",
            "description": "큰 그림을 먼저 세우고 깊이 파고듭니다.",
            "strengths": ["계획 수립", "독립 학습", "개념 연결", "목표 지향"],
            "weaknesses": ["암기 과목", "협업", "휴식 부족", "완벽주의"],
        },
        "studyRecommendations": {
            "environment": "조용한 독서실",
            "environmentSajuBasis": "수(水)가 부족합니다.",
            "methods": ["마인드맵", "백지 복습", "문제 설계", "요약 노트", "교차 학습"],
            "methodsSajuBasis": "목(木)이 강해 확장형 학습이 맞습니다.",
            "schedule": "오전 9시-12시 집중 학습",
            "scheduleSajuBasis": "사시(巳時) 출생으로 오전 에너지가 높습니다.",
        },
        "personalizedTips": ["팁1", "팁2", "팁3", "팁4", "팁5", "팁6"],
    }


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="sk-test",
        openai_model="gpt-4o-mini",
        openai_max_tokens=4000,
        openai_timeout_seconds=5.0,
        _env_file=None,
    )


@pytest.fixture
def fake_openai(complete_analysis):
    return FakeOpenAI(content=json.dumps(complete_analysis, ensure_ascii=False))


@pytest.fixture
def client(settings, fake_openai):
    """TestClient wired to the fake OpenAI client and test settings."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_client_factory] = lambda: (lambda _settings: fake_openai)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

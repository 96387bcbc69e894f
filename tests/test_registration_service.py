"""RegistrationService 테스트: 중복 확인, 입력 검증, 카테고리 추천 우선순위."""

from __future__ import annotations

from choseong_finder.services.dataset import Dataset
from choseong_finder.services.registration_service import RegistrationService


def test_duplicate_by_exact_name(dataset):
    svc = RegistrationService(dataset)
    assert svc.is_duplicate("까치")
    assert svc.is_duplicate(" 까치 ")
    assert not svc.is_duplicate("까치밥")


def test_validate(dataset):
    svc = RegistrationService(dataset)
    assert svc.validate("비빔밥", "food") is None
    assert svc.validate("", "food") == "이름을 입력해주세요."
    assert svc.validate("비빔밥", "") == "카테고리를 선택해주세요."
    assert svc.validate("비빔밥", "drink") == "알 수 없는 카테고리입니다."
    assert svc.validate("bibimbap", "food") == "한글만 입력 가능합니다."
    assert svc.validate("ㅂㅂㅂ", "food") == "한글만 입력 가능합니다."
    assert svc.validate("가" * 201, "food") == "이름은 최대 200자까지 입력 가능합니다."
    assert svc.validate("까치", "animal") == "이미 등록된 항목입니다."


def test_suggest_category_exact_name_first(dataset):
    assert RegistrationService(dataset).suggest_category("돼지국밥") == "food"


def test_suggest_category_plurality_of_choseong_matches(dataset):
    # ㄱㅇㅈ: animal 2건(강아지, 강아지 인형), food 1건, plant 1건
    assert RegistrationService(dataset).suggest_category("ㄱㅇㅈ") == "animal"
    assert RegistrationService(dataset).suggest_category("ㄷㅈㄱ") == "food"


def test_suggest_category_sample_is_limited():
    ds = Dataset.from_records(
        [{"category": "early", "name": "가"} for _ in range(3)]
        + [{"category": "late", "name": "가"} for _ in range(10)]
    )
    assert RegistrationService(ds, sample_limit=3).suggest_category("ㄱ") == "early"
    assert RegistrationService(ds, sample_limit=100).suggest_category("ㄱ") == "late"


def test_suggest_category_falls_back_to_most_frequent(dataset):
    svc = RegistrationService(dataset)
    assert svc.suggest_category("ㅋㅋ") == "animal"
    assert svc.suggest_category("") == "animal"


def test_suggest_category_tie_prefers_later_category():
    ds = Dataset.from_records([
        {"category": "a", "name": "가"},
        {"category": "b", "name": "가"},
    ])
    assert RegistrationService(ds).suggest_category("ㄱ") == "b"


def test_suggest_category_empty_dataset():
    assert RegistrationService(Dataset()).suggest_category("ㄱ") is None

import datetime

from fastfour.utils.validation import (
    ValidationResult,
    validate_date,
    validate_player_names,
    validate_score,
)


def test_validation_result_truthiness():
    assert ValidationResult(True, sanitized_value=1)
    assert not ValidationResult(False, "nope")
    assert "INVALID" in repr(ValidationResult(False, "nope"))


def test_player_names_are_stripped():
    result = validate_player_names([" Ana ", "Rui"], expected_count=2)
    assert result.sanitized_value == ["Ana", "Rui"]


def test_player_names_reject_blank_and_wrong_count():
    assert not validate_player_names(["Ana", ""], expected_count=2)
    assert not validate_player_names(["Ana"], expected_count=2)
    assert not validate_player_names("Ana", expected_count=3)
    assert not validate_player_names(["Ana", None], expected_count=2)


def test_player_names_allow_duplicates():
    assert validate_player_names(["Ana", "Ana"], expected_count=2)


def test_score_validation():
    assert validate_score(0).sanitized_value == 0
    assert validate_score("5").sanitized_value == 5
    assert not validate_score(-1)
    assert not validate_score("-1")
    assert not validate_score(1.5)
    assert not validate_score(False)
    assert not validate_score("x")
    assert not validate_score("²")
    assert not validate_score("-")


def test_date_validation():
    assert validate_date("2025-03-09").sanitized_value == "2025-03-09"
    assert validate_date(datetime.date(2025, 3, 9)).sanitized_value == "2025-03-09"
    assert validate_date(datetime.datetime(2025, 3, 9, 20, 30)).sanitized_value == "2025-03-09"
    assert not validate_date("")
    assert not validate_date(None)
    assert not validate_date("31/31/2025")

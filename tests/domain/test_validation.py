"""Tests for character and separation validation."""

import pytest

from rollctl.domain.errors import (
    AmbiguousTermSeparation,
    ExpressionRejected,
    InvalidCharacter,
)
from rollctl.domain.validation import ACCEPTED_CHARACTERS, accepts, diagnose, validate


class TestAccepts:
    @pytest.mark.parametrize(
        "text",
        [
            "3d3 3d3",
            "3d3+3d3",
            "3d20 + 5 - 1d4",
            "10",
            "0d6",
            "-1d4 + 10",
            "",
        ],
    )
    def test_accepted(self, text: str) -> None:
        assert accepts(text)
        assert diagnose(text) == []

    @pytest.mark.parametrize("text", ["3d33d3", "3dd3", "1d6d6", "2d10 + 3d4d"])
    def test_ambiguous_rejected(self, text: str) -> None:
        assert not accepts(text)

    @pytest.mark.parametrize("text", ["3d3x", "3D6", "1d6*2", "(1d6)", "1d6\t+2"])
    def test_invalid_characters_rejected(self, text: str) -> None:
        assert not accepts(text)


class TestDiagnose:
    def test_ambiguous_reason(self) -> None:
        reasons = diagnose("3d33d3")
        assert len(reasons) == 1
        assert isinstance(reasons[0], AmbiguousTermSeparation)
        assert reasons[0].code == "AMBIGUOUS_TERM_SEPARATION"
        assert reasons[0].column == 1

    def test_double_delimiter_reason(self) -> None:
        reasons = diagnose("3dd3")
        assert [r.code for r in reasons] == ["AMBIGUOUS_TERM_SEPARATION"]
        assert "dd" in reasons[0].message

    def test_invalid_character_names_offenders(self) -> None:
        reasons = diagnose("3d3x + 2y")
        assert len(reasons) == 1
        assert isinstance(reasons[0], InvalidCharacter)
        assert "'x'" in reasons[0].message
        assert "'y'" in reasons[0].message
        assert reasons[0].column == 3

    def test_offenders_listed_once(self) -> None:
        (reason,) = diagnose("xxx")
        assert reason.message.count("'x'") == 1

    def test_reports_all_reasons(self) -> None:
        """Both problems are reported together, separation first."""
        codes = [r.code for r in diagnose("3dd3x")]
        assert codes == ["AMBIGUOUS_TERM_SEPARATION", "INVALID_CHARACTER"]


class TestValidate:
    def test_valid_returns_none(self) -> None:
        assert validate("2d6 + 1") is None

    def test_invalid_raises_with_all_reasons(self) -> None:
        with pytest.raises(ExpressionRejected) as exc_info:
            validate("3dd3x")
        assert len(exc_info.value.reasons) == 2
        assert "Lacking separation" in str(exc_info.value)


class TestAcceptedCharacters:
    def test_character_set(self) -> None:
        assert set("0123456789") <= ACCEPTED_CHARACTERS
        assert {" ", "d", "+", "-"} <= ACCEPTED_CHARACTERS
        assert len(ACCEPTED_CHARACTERS) == 14

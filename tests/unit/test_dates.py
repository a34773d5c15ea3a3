import pytest

from lead_relay.extraction.answers import DateAnswer, PhoneAnswer, TextAnswer
from lead_relay.extraction.dates import as_dob, normalize_dob


class TestNormalizeDob:
    @pytest.mark.parametrize(
        "value",
        [
            "1990-05-04",
            "1990/05/4",
            "05/04/1990",
            "5-4-1990",
            " 1990-05-04 ",
            "1990-05-04T10:30:00Z",
            "May 4, 1990",
            "4 May 1990",
            "19900504",
        ],
    )
    def test_recognized_formats(self, value: str) -> None:
        assert normalize_dob(value) == "19900504"

    @pytest.mark.parametrize("value", [None, "", "yesterday", "1990-02-30", "13/01/1990"])
    def test_unrecognized_or_impossible(self, value: object) -> None:
        assert normalize_dob(value) is None


class TestAsDob:
    def test_date_answer(self) -> None:
        assert as_dob(DateAnswer(1990, 5, 4)) == "19900504"

    def test_impossible_date_answer(self) -> None:
        assert as_dob(DateAnswer(1990, 2, 31)) is None

    def test_text_answer(self) -> None:
        assert as_dob(TextAnswer("05/04/1990")) == "19900504"

    def test_other_shapes(self) -> None:
        assert as_dob(PhoneAnswer("555")) is None
        assert as_dob(None) is None

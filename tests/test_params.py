import pytest

from wquiz.errors import InvalidUrlError
from wquiz.params import (
    extract_course_code,
    parse_question_count,
    parse_session_url,
    parse_time_budget,
    parse_weeks,
)


class TestCourseCode:
    def test_plain_path(self):
        assert extract_course_code("/quiz/CS101") == "CS101"

    def test_nested_route_and_extra_segments(self):
        assert extract_course_code("/app/quiz/CS101/start") == "CS101"

    def test_url_encoded_code(self):
        assert extract_course_code("/quiz/CS%20101") == "CS 101"

    def test_missing_quiz_segment(self):
        with pytest.raises(InvalidUrlError):
            extract_course_code("/courses/CS101")

    def test_empty_code(self):
        with pytest.raises(InvalidUrlError):
            extract_course_code("/quiz/")


class TestWeeks:
    def test_dash_separated(self):
        assert parse_weeks("1-2-5") == {1, 2, 5}

    def test_invalid_tokens_are_dropped(self):
        assert parse_weeks("1-x-0--3") == {1, 3}

    def test_superscript_digit_is_dropped(self):
        assert parse_weeks("1-\u00b2-3") == {1, 3}

    def test_absent(self):
        assert parse_weeks(None) == set()
        assert parse_weeks("") == set()


class TestQuestionCount:
    def test_absent_means_zero(self):
        assert parse_question_count(None) == 0
        assert parse_question_count("") == 0

    def test_number(self):
        assert parse_question_count("12") == 12

    @pytest.mark.parametrize("raw", ["abc", "-1", "2.5", "\u00b2"])
    def test_malformed(self, raw):
        with pytest.raises(InvalidUrlError):
            parse_question_count(raw)


class TestTimeBudget:
    @pytest.mark.parametrize(
        "raw,expected",
        [("003000", 1800), ("013005", 5405), ("000045", 45), ("990000", 356400)],
    )
    def test_hhmmss(self, raw, expected):
        assert parse_time_budget(raw) == expected

    def test_absent_or_zero_uses_default(self):
        assert parse_time_budget(None) == 1800
        assert parse_time_budget("000000") == 1800
        assert parse_time_budget("", default=60) == 60

    @pytest.mark.parametrize("raw", ["3000", "0030000", "00a000", "006000", "000075"])
    def test_malformed(self, raw):
        with pytest.raises(InvalidUrlError):
            parse_time_budget(raw)


def test_parse_session_url():
    params = parse_session_url("https://example.org/quiz/CS101?weeks=1-2&numQ=4&time=003000")
    assert params.course_code == "CS101"
    assert params.weeks == {1, 2}
    assert params.question_count == 4
    assert params.time_budget_seconds == 1800


def test_parse_session_url_defaults():
    params = parse_session_url("/quiz/CS101")
    assert params.weeks == set()
    assert params.question_count == 0
    assert params.time_budget_seconds == 1800

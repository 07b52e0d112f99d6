import asyncio
import random

import pytest

from wquiz.errors import EmptySelectionError, InvalidUrlError, NetworkError
from wquiz.initializer import initialize_session


def test_weeks_one_and_two_sample_four(bank_source):
    session = asyncio.run(
        initialize_session("/quiz/CS101?weeks=1-2&numQ=4&time=003000", bank_source, rng=random.Random(5))
    )
    assert session.total_questions == 4
    assert session.time_remaining_seconds == 1800
    assert {q.week_label for q in session.questions} <= {"1", "2"}
    assert session.course_code == "CS101"
    assert session.title == "Software Testing"
    assert session.current_index == 0
    assert not session.submitted
    assert bank_source.requested == ["CS101"]


def test_timer_is_not_started(bank_source):
    session = asyncio.run(initialize_session("/quiz/CS101?weeks=1&numQ=2", bank_source))
    assert session.timer._task is None


def test_invalid_url_skips_fetch(bank_source):
    with pytest.raises(InvalidUrlError):
        asyncio.run(initialize_session("/courses/CS101?weeks=1&numQ=2", bank_source))
    assert bank_source.requested == []


def test_network_error_carries_status(failing_bank_source):
    with pytest.raises(NetworkError) as info:
        asyncio.run(initialize_session("/quiz/CS101?weeks=1&numQ=2", failing_bank_source(404)))
    assert info.value.status == 404


def test_empty_selection(bank_source):
    with pytest.raises(EmptySelectionError):
        asyncio.run(initialize_session("/quiz/CS101?weeks=7&numQ=2", bank_source))

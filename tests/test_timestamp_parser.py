import pytest

from mediatools.domain.exceptions import TimestampParseException
from mediatools.domain.models import TimestampEntry
from mediatools.services.timestamp_parser import parse_timestamp, parse_timestamps


def test_parse_timestamp_single_digit_hour():
    assert parse_timestamp("1 1 Break Out - Version 1 0:00") == TimestampEntry(
        disc=1, track=1, title="Break Out - Version 1", start_time="0:00"
    )


def test_parse_timestamp_full_time():
    entry = parse_timestamp("4 12 Prove It All Night - Version 1 12:41:38")

    assert entry.disc == 4
    assert entry.track == 12
    assert entry.title == "Prove It All Night - Version 1"
    assert entry.start_time == "12:41:38"


def test_parse_timestamp_title_ending_in_number():
    entry = parse_timestamp("1 2 Song 2 3:45")

    assert entry.title == "Song 2"
    assert entry.start_time == "3:45"


def test_parse_timestamp_strips_surrounding_whitespace():
    assert parse_timestamp("  2 3 Intro 1:02:03  ").start_time == "1:02:03"


@pytest.mark.parametrize(
    "line",
    [
        "Intro 0:00",
        "1 1 0:00",
        "1 1 Intro",
        "1 1 Intro 0-00",
        "a 1 Intro 0:00",
        "1 -2 Intro 0:00",
    ],
)
def test_parse_timestamp_rejects_malformed_lines(line):
    with pytest.raises(TimestampParseException) as excinfo:
        parse_timestamp(line)

    assert excinfo.value.line == line
    assert line in str(excinfo.value)


def test_parse_timestamps_keeps_order_and_skips_blank_lines():
    text = "1 1 One 0:00\n\n   \n1 2 Two 3:10\n2 1 Three 1:03:00\n"

    entries = parse_timestamps(text)

    assert [(e.disc, e.track, e.title) for e in entries] == [
        (1, 1, "One"),
        (1, 2, "Two"),
        (2, 1, "Three"),
    ]


def test_parse_timestamps_is_strict():
    with pytest.raises(TimestampParseException, match="not a timestamp"):
        parse_timestamps("1 1 One 0:00\nnot a timestamp\n1 2 Two 3:10")


def test_parse_timestamps_empty_text():
    assert parse_timestamps("") == []

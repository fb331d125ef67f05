"""
Parses the timestamp list that drives the split operation.

Each non-blank line describes where one track starts:

    <disc> <track> <title, may contain spaces> <start time>

    1 1 Break Out - Version 1 0:00
    4 1 Prove It All Night - Version 1 2:41:38

The parser only maps lines to `TimestampEntry` objects. Where a track ends
(the next entry's start, or the end of the file) is decided by the split
command builder.
"""

import re
from typing import List

from ..domain.exceptions import TimestampParseException
from ..domain.models import TimestampEntry

# The start time allows one or two hour digits, and the colon between minutes
# and seconds may be missing.
TIMESTAMP_PATTERN = re.compile(
    r"^(?P<disc>\S+)\s+(?P<track>\S+)\s+(?P<title>.+?)\s+"
    r"(?P<start_time>[0-9]{1,2}:[0-9]{1,2}:?[0-9]{1,2})$"
)


def parse_timestamp(line: str) -> TimestampEntry:
    """
    Parses one timestamp line.

    Raises:
        TimestampParseException: If the line does not have the expected structure
                                 or its disc or track number is not a
                                 non-negative integer.
    """
    match = TIMESTAMP_PATTERN.match(line.strip())
    if match is None:
        raise TimestampParseException(line)

    disc = _parse_number(line, "disc", match.group("disc"))
    track = _parse_number(line, "track", match.group("track"))
    return TimestampEntry(
        disc=disc,
        track=track,
        title=match.group("title"),
        start_time=match.group("start_time"),
    )


def parse_timestamps(text: str) -> List[TimestampEntry]:
    """
    Parses a whole timestamp list, skipping blank lines.

    Parsing is strict: the first malformed line aborts with an exception naming
    that line. Entry order is preserved.
    """
    return [parse_timestamp(line) for line in text.splitlines() if line.strip()]


def _parse_number(line: str, field_name: str, value: str) -> int:
    if not re.fullmatch(r"[0-9]+", value):
        raise TimestampParseException(line, f"{field_name} '{value}' is not a number")
    return int(value)

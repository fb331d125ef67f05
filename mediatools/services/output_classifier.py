"""
Decides whether an ffmpeg run succeeded from its diagnostic output.

FFmpeg writes everything to stderr and its exit status does not separate
warnings from failures reliably, so the default strategy looks for known
failure keywords line by line. This is a heuristic: a run that exits with 0 can
still be classified as failed, and a failure that prints none of the keywords
is classified as a success.

Callers depend only on the `OutputClassifier` interface, so the strategy can be
replaced, e.g. with `ExitCodeClassifier`, without touching them.
"""

from typing import Iterable, Optional, Sequence

from ..config.common import FFMPEG_FAILURE_MARKERS
from ..domain.models import EngineOutcome


class OutputClassifier:
    """Strategy interface: classify the lines of one invocation's diagnostics."""

    def is_failure_line(self, line: str) -> bool:
        """Returns True if `line` on its own marks the invocation as failed."""
        return False

    def classify(self, lines: Iterable[str], return_code: Optional[int] = None) -> EngineOutcome:
        raise NotImplementedError("Subclasses must implement classify().")


class KeywordOutputClassifier(OutputClassifier):
    """
    Classifies an invocation as failed when any line contains a failure marker.

    The process exit status is ignored.
    """

    def __init__(self, markers: Sequence[str] = FFMPEG_FAILURE_MARKERS):
        self.markers = tuple(markers)

    def is_failure_line(self, line: str) -> bool:
        return any(marker in line for marker in self.markers)

    def classify(self, lines: Iterable[str], return_code: Optional[int] = None) -> EngineOutcome:
        failed_lines = [line for line in lines if self.is_failure_line(line)]
        if failed_lines:
            return EngineOutcome.failed(failed_lines[0], failed_lines)
        return EngineOutcome.succeeded()


class ExitCodeClassifier(OutputClassifier):
    """Classifies an invocation by its exit status alone."""

    def classify(self, lines: Iterable[str], return_code: Optional[int] = None) -> EngineOutcome:
        if return_code:
            return EngineOutcome.failed(f"ffmpeg exited with status {return_code}")
        return EngineOutcome.succeeded()


DEFAULT_CLASSIFIER = KeywordOutputClassifier()

"""Shared fixtures for the Media Tools tests."""

from typing import List

import pytest
from loguru import logger

from mediatools.domain.exceptions import EngineFailureException
from mediatools.domain.models import EngineInvocation, EngineOutcome


class RecordingRunner:
    """Stands in for `run_ffmpeg`: records every invocation instead of starting ffmpeg."""

    def __init__(self, fail_on_call: int = 0):
        self.invocations: List[EngineInvocation] = []
        self.fail_on_call = fail_on_call

    def __call__(self, invocation: EngineInvocation) -> EngineOutcome:
        self.invocations.append(invocation)
        if self.fail_on_call and len(self.invocations) == self.fail_on_call:
            raise EngineFailureException("Aborting due to ffmpeg failure!")
        return EngineOutcome.succeeded()

    @property
    def args(self) -> List[List[str]]:
        return [invocation.args for invocation in self.invocations]


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def log_messages():
    """Collects "<LEVEL> <message>" strings emitted through loguru."""
    messages: List[str] = []
    handler_id = logger.add(
        lambda message: messages.append(f"{message.record['level'].name} {message.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


def touch(path, content: str = "x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path

"""
This module runs the external FFmpeg process for one unit of work.

Each call starts exactly one ffmpeg process, blocks until it exits, and then
classifies its diagnostic output. The command line is always logged before the
process starts so a failing invocation can be reproduced by hand.
"""

import os
import shlex
import subprocess
from typing import List

from loguru import logger

from ..config.common import FFMPEG_LOG_PREFIX, QUIET_FAILURE_HINT
from ..domain.exceptions import EngineFailureException, EngineNotFoundException
from ..domain.models import EngineInvocation, EngineOutcome
from ..services.output_classifier import DEFAULT_CLASSIFIER, OutputClassifier
from .module_updater import Modules


def format_command(cmd_list: List[str]) -> str:
    """Quotes and joins a command list the way the current platform's shell would read it."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd_list)
    return shlex.join(cmd_list)


def run_ffmpeg(
    invocation: EngineInvocation,
    classifier: OutputClassifier = DEFAULT_CLASSIFIER,
) -> EngineOutcome:
    """
    Executes one ffmpeg invocation and classifies its output.

    FFmpeg writes its diagnostics to stderr, not stdout. After the process has
    exited, stderr is scanned line by line: lines flagged by the classifier are
    logged as errors, every other line is logged at INFO unless the invocation is
    quiet.

    Args:
        invocation: The arguments (without the executable) and the quiet flag.
        classifier: The strategy deciding success or failure.

    Returns:
        The successful `EngineOutcome`.

    Raises:
        EngineNotFoundException: If the ffmpeg executable cannot be started.
        EngineFailureException: If the output is classified as a failure.
    """
    cmd_list = [Modules.get_ffmpeg_path(), *invocation.args]
    logger.info(format_command(cmd_list))

    try:
        result = subprocess.run(
            cmd_list,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
        )
    except FileNotFoundError as e:
        raise EngineNotFoundException(
            f"Command not found: '{cmd_list[0]}'. Ensure it's in your system's PATH or configured in 'config.user.yaml'."
        ) from e

    lines = result.stderr.splitlines() if result.stderr else []
    for line in lines:
        out = f"{FFMPEG_LOG_PREFIX} {line}"
        if classifier.is_failure_line(line):
            logger.error(out)
        elif not invocation.quiet:
            logger.info(out)

    outcome = classifier.classify(lines, result.returncode)
    if not outcome.success:
        if not outcome.failed_lines:
            logger.error(f"{FFMPEG_LOG_PREFIX} {outcome.reason}")
        raise EngineFailureException(
            "Aborting due to ffmpeg failure!" + (QUIET_FAILURE_HINT if invocation.quiet else "")
        )
    return outcome

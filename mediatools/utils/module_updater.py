"""
This module provides the Modules class, which finds the ffmpeg executable and
checks once at startup that it can actually be started.
"""
import subprocess
import sys

from loguru import logger

# Read through the module so a changed `MODULE_PATH` is picked up at call time.
from ..config import common


class Modules:
    """
    Locates and checks the external ffmpeg executable.

    The directory named by `paths.ffmpeg_dir` in `config.user.yaml` wins; without
    it (or when the executable is not there) the plain `ffmpeg` command is used
    and resolved through PATH by the operating system.
    """

    @staticmethod
    def get_ffmpeg_path() -> str:
        """
        Returns the command used to start ffmpeg.

        Returns:
            The absolute path of the configured executable (`ffmpeg.exe` on
            Windows), or "ffmpeg" to rely on PATH.
        """
        exe_name = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"

        ffmpeg_dir = common.MODULE_PATH
        if ffmpeg_dir and ffmpeg_dir.is_dir():
            candidate = ffmpeg_dir / exe_name
            if candidate.is_file():
                return str(candidate)
            logger.warning(f"No '{exe_name}' in configured ffmpeg_dir '{ffmpeg_dir}', using the one on PATH.")

        return "ffmpeg"

    @staticmethod
    def verify_ffmpeg() -> bool:
        """
        Runs `ffmpeg -version` to make sure the executable works.

        Engine operations call this before touching any file and refuse to start
        when it fails.

        Returns:
            True if ffmpeg ran and exited with status 0, False otherwise.
        """
        ffmpeg_cmd = Modules.get_ffmpeg_path()

        try:
            result = subprocess.run(
                [ffmpeg_cmd, "-version"],
                check=True,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"'{ffmpeg_cmd} -version' exited with status {e.returncode}:\n{e.stderr}")
            return False
        except OSError as e:
            logger.error(
                f"Could not start '{ffmpeg_cmd}' ({e}). Install ffmpeg and put it on PATH, "
                "or set paths.ffmpeg_dir in 'config.user.yaml'."
            )
            return False

        first_line = next(iter(result.stdout.splitlines()), "")
        logger.debug(f"Found {first_line or ffmpeg_cmd}")
        return True

"""
Common configuration settings used throughout the application.

This module contains globally shared configuration settings and constants that are
used by every operation: the logging format, the ffmpeg overwrite flags, the
keywords used to classify ffmpeg output and the location of the ffmpeg
executable. The executable location is loaded from an external YAML file, so it
can be customised without modifying the source code.
"""
import os
from pathlib import Path

import yaml
from loguru import logger

# --- User-Defined Path Configuration ---
# This block loads user-specific paths from a 'config.user.yaml' file located
# at the project root (or from the file named by MEDIATOOLS_CONFIG). This allows
# users to point at a specific FFmpeg build without hardcoding paths.

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
USER_CONFIG_ENV_VAR = "MEDIATOOLS_CONFIG"
USER_CONFIG_PATH = Path(
    os.environ.get(USER_CONFIG_ENV_VAR, PROJECT_ROOT / "config.user.yaml")
)

# The directory containing the FFmpeg executable. If not provided or None, the
# application assumes the executable is available in the system's PATH.
MODULE_PATH: Path | None = None


def load_user_config(config_path: Path) -> dict:
    """
    Reads the user YAML configuration file.

    A missing file is not an error. A file that cannot be parsed is reported as a
    warning and treated as empty, so a typo never blocks a run.

    Args:
        config_path: Path of the YAML file to read.

    Returns:
        The parsed mapping, or an empty dict.
    """
    if not config_path.is_file():
        logger.debug(f"User config '{config_path}' not found. Relying on system PATH for executables.")
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load or parse '{config_path}': {e}")
        return {}
    if not isinstance(user_config, dict):
        logger.warning(f"Ignoring '{config_path}': top level must be a mapping.")
        return {}
    return user_config


_user_config = load_user_config(USER_CONFIG_PATH)
_paths_config = _user_config.get("paths") or {}
_ffmpeg_dir_str = _paths_config.get("ffmpeg_dir") if isinstance(_paths_config, dict) else None
if _ffmpeg_dir_str:
    MODULE_PATH = Path(_ffmpeg_dir_str)


# --- Logging Configuration ---

# The format string for the Loguru logger.
LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

DEFAULT_LOG_LEVEL = "INFO"

# Prefix put in front of every echoed ffmpeg diagnostic line.
FFMPEG_LOG_PREFIX = "[FFmpeg]"


# --- FFmpeg Argument Conventions ---

# First argument of every invocation: overwrite existing outputs, or never do so.
OVERWRITE_FLAG = "-y"
NO_OVERWRITE_FLAG = "-n"

# FFmpeg writes all of its diagnostics to stderr, not stdout, and its exit code
# alone does not reliably separate warnings from failures. A line containing any
# of these markers classifies the invocation as failed.
FFMPEG_FAILURE_MARKERS = (
    "Error",
    "Conversion failed",
    "Unknown encoder",
    "Invalid argument",
)

# Appended to the failure message when ffmpeg output was suppressed.
QUIET_FAILURE_HINT = (
    " Run without '-q' or '--qffmpeg' to see the full ffmpeg output for why it failed."
)

"""
Command-Line Interface (CLI) setup for Media Tools.

This module uses Python's `argparse` to define one sub-command per operation
and the flags shared by all of them.
"""
import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from .config.audio import DEFAULT_AUDIO_BITRATE, DEFAULT_AUDIO_CODEC, DEFAULT_AUDIO_CONTAINER
from .config.common import DEFAULT_LOG_LEVEL
from .config.video import (
    DEFAULT_AUDIO_STREAM,
    DEFAULT_CRF,
    DEFAULT_KEYFRAME_INTERVAL,
    DEFAULT_PRESET,
    DEFAULT_SUBTITLE_STREAM,
)


def _extension_list(value: str) -> Tuple[str, ...]:
    extensions = tuple(ext.strip().lstrip(".") for ext in value.split(",") if ext.strip())
    if not extensions:
        raise argparse.ArgumentTypeError("expected a comma separated list of extensions, e.g. 'mkv,mp4'")
    return extensions


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or greater, got {value}")
    return number


def _add_engine_flags(parser: argparse.ArgumentParser, default) -> None:
    """
    Adds the flags shared by every ffmpeg operation.

    They are registered on the top-level parser and on every sub-command, so
    they may be given before or after the command name. Sub-commands use
    SUPPRESS as default so they do not reset a flag given before the command.
    """
    parser.add_argument(
        "-y", "--overwrite", action="store_true", default=default,
        help="Overwrite existing output files instead of skipping them."
    )
    parser.add_argument(
        "-q", "--qffmpeg", action="store_true", default=default,
        help="Hide ffmpeg output unless it reports an error."
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediatools",
        description="Batch media file tools built on ffmpeg.",
    )
    parser.add_argument(
        "--log-level", type=str, default=DEFAULT_LOG_LEVEL,
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level."
    )
    _add_engine_flags(parser, default=False)

    engine_flags = argparse.ArgumentParser(add_help=False)
    _add_engine_flags(engine_flags, default=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    cleanup = subparsers.add_parser(
        "cleanup-file-names",
        help="Remove all IDs in square brackets from directory/file names recursively.",
        description="E.g. 'Badlands [12345678].flac' -> 'Badlands.flac'",
    )
    cleanup.add_argument("path", type=Path)

    audio = subparsers.add_parser(
        "transcode-audio", parents=[engine_flags],
        help="Transcode an audio file or a directory tree of audio files.",
    )
    audio.add_argument("src", type=Path, help="Source file or directory.")
    audio.add_argument("dest", type=Path, help="Destination directory.")
    audio.add_argument(
        "--src-container", type=str, default=None,
        help="Only transcode source files with this extension (e.g. 'flac')."
    )
    audio.add_argument("--bitrate", type=str, default=DEFAULT_AUDIO_BITRATE, help="Target bitrate, e.g. '320k'.")
    audio.add_argument("--codec", type=str, default=DEFAULT_AUDIO_CODEC, help="aac, libfdk_aac, mp3 or opus.")
    audio.add_argument("--container", type=str, default=DEFAULT_AUDIO_CONTAINER, help="Output container / extension.")

    video = subparsers.add_parser(
        "transcode-video", parents=[engine_flags],
        help="Re-encode the video of every mkv/mp4/mov file in a directory tree to AV1.",
    )
    video.add_argument("src", type=Path)
    video.add_argument("dest", type=Path)
    video.add_argument("--preset", type=_non_negative_int, default=DEFAULT_PRESET)
    video.add_argument("--crf", type=_non_negative_int, default=DEFAULT_CRF)
    video.add_argument("--keyframe-interval", type=_non_negative_int, default=DEFAULT_KEYFRAME_INTERVAL)
    video.add_argument("--force-10bit", action="store_true", help="Encode with a 10-bit pixel format.")

    merge = subparsers.add_parser(
        "merge-videos", parents=[engine_flags],
        help="Combine the video/audio of one directory's files with everything else from another's.",
    )
    merge.add_argument("base", type=Path, help="Directory providing metadata, subtitles and attachments.")
    merge.add_argument("content", type=Path, help="Directory providing the video and audio streams.")
    merge.add_argument("dest", type=Path)
    merge.add_argument(
        "--use-content-names", action="store_true",
        help="Name outputs after the content files instead of the base files."
    )
    merge.add_argument("--video-from-base", action="store_true", help="Keep the base file's video stream.")
    merge.add_argument("--audio-from-base", action="store_true", help="Keep the base file's audio streams.")
    merge.add_argument(
        "--extensions", type=_extension_list, default=None,
        help="Only pair files with these extensions, e.g. 'mkv,mp4'. Default: all files."
    )

    tracks = subparsers.add_parser(
        "set-default-tracks", parents=[engine_flags],
        help="Set the default audio and subtitle track of every mkv/mp4/mov file in a directory.",
    )
    tracks.add_argument("src", type=Path)
    tracks.add_argument("dest", type=Path)
    tracks.add_argument("--audio-stream", type=_non_negative_int, default=DEFAULT_AUDIO_STREAM)
    tracks.add_argument("--subtitle-stream", type=_non_negative_int, default=DEFAULT_SUBTITLE_STREAM)

    split = subparsers.add_parser(
        "split-audio", parents=[engine_flags],
        help="Split one audio file into tracks using a timestamp file.",
        description="Timestamp lines: '<disc> <track> <title> <start time>', e.g. '1 1 Break Out 0:00'.",
    )
    split.add_argument("src_file", type=Path)
    split.add_argument("dest", type=Path)
    split.add_argument("timestamps_file", type=Path)
    split.add_argument("--artist", type=str, default=None)
    split.add_argument("--album", type=str, default=None)
    split.add_argument("--date", type=str, default=None)

    return parser


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments for Media Tools.

    Args:
        argv: The arguments to parse. Defaults to `sys.argv[1:]`.

    Returns:
        argparse.Namespace: The parsed command and its options.
    """
    return build_parser().parse_args(argv)

"""
Main entry point for Media Tools.

This script configures logging, parses command-line arguments and runs the
operation selected by the sub-command. Errors that end the run are logged and
turned into a non-zero exit status.
"""

import sys
from typing import List, Optional

from loguru import logger

from mediatools.cli import get_args
from mediatools.config.common import LOGGER_FORMAT
from mediatools.domain.exceptions import MediaToolsException
from mediatools.domain.models import (
    DefaultTrackSpec,
    EngineOptions,
    MergeSpec,
    SplitSpec,
    TranscodeSpec,
    VideoTranscodeSpec,
)
from mediatools.pipeline.operations import (
    BaseOperation,
    CleanupFileNamesOperation,
    MergeVideosOperation,
    SetDefaultTracksOperation,
    SplitAudioOperation,
    TranscodeAudioOperation,
    TranscodeVideoOperation,
)
from mediatools.utils.module_updater import Modules


def build_operation(args) -> BaseOperation:
    """Creates the operation selected by the parsed sub-command."""
    options = EngineOptions(
        overwrite=getattr(args, "overwrite", False),
        quiet=getattr(args, "qffmpeg", False),
    )

    if args.command == "cleanup-file-names":
        return CleanupFileNamesOperation(args.path)
    if args.command == "transcode-audio":
        spec = TranscodeSpec(
            bitrate=args.bitrate,
            codec=args.codec,
            container=args.container,
            src_container=args.src_container,
        )
        return TranscodeAudioOperation(args.src, args.dest, spec, options)
    if args.command == "transcode-video":
        spec = VideoTranscodeSpec(
            preset=args.preset,
            crf=args.crf,
            keyframe_interval=args.keyframe_interval,
            force_10bit=args.force_10bit,
        )
        return TranscodeVideoOperation(args.src, args.dest, spec, options)
    if args.command == "merge-videos":
        spec = MergeSpec(
            video_from_content=not args.video_from_base,
            audio_from_content=not args.audio_from_base,
            use_content_names=args.use_content_names,
            extensions=args.extensions,
        )
        return MergeVideosOperation(args.base, args.content, args.dest, spec, options)
    if args.command == "set-default-tracks":
        spec = DefaultTrackSpec(audio_stream=args.audio_stream, subtitle_stream=args.subtitle_stream)
        return SetDefaultTracksOperation(args.src, args.dest, spec, options)
    if args.command == "split-audio":
        spec = SplitSpec(artist=args.artist, album=args.album, date=args.date)
        return SplitAudioOperation(args.src_file, args.dest, args.timestamps_file, spec, options)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Runs one Media Tools command.

    Returns:
        The process exit status: 0 when the operation finished or was abandoned
        because of a configuration error, 1 when it failed. Parameters are
        validated before the ffmpeg executable is checked.
    """
    args = get_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level, format=LOGGER_FORMAT)
    logger.debug(f"Parsed arguments: {args}")

    operation = build_operation(args)
    try:
        if not operation.prepare():
            return 0
        if operation.requires_engine and not Modules.verify_ffmpeg():
            return 1
        operation.process_all()
    except (MediaToolsException, OSError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Value types shared by the traversal, command building and invocation layers.

Every object here is constructed, used and discarded within a single operation
run. Nothing is persisted and nothing is cached between runs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..config.audio import (
    DEFAULT_AUDIO_BITRATE,
    DEFAULT_AUDIO_CODEC,
    DEFAULT_AUDIO_CONTAINER,
)
from ..config.video import (
    DEFAULT_AUDIO_STREAM,
    DEFAULT_CRF,
    DEFAULT_KEYFRAME_INTERVAL,
    DEFAULT_PRESET,
    DEFAULT_SUBTITLE_STREAM,
)


@dataclass(frozen=True)
class SourceEntry:
    """A directory child discovered during traversal."""

    path: Path
    is_dir: bool


@dataclass(frozen=True)
class PathPair:
    """A source file and the destination it is written to."""

    source: Path
    destination: Path


@dataclass(frozen=True)
class EngineOptions:
    """Flags shared by every operation that runs ffmpeg."""

    overwrite: bool = False
    quiet: bool = False


@dataclass(frozen=True)
class TranscodeSpec:
    """Parameters of the audio transcode operation."""

    bitrate: str = DEFAULT_AUDIO_BITRATE
    codec: str = DEFAULT_AUDIO_CODEC
    container: str = DEFAULT_AUDIO_CONTAINER
    # Restricts the walk to files with this extension, e.g. "flac".
    src_container: Optional[str] = None


@dataclass(frozen=True)
class VideoTranscodeSpec:
    """Parameters of the AV1 video transcode operation."""

    preset: int = DEFAULT_PRESET
    crf: int = DEFAULT_CRF
    keyframe_interval: int = DEFAULT_KEYFRAME_INTERVAL
    force_10bit: bool = False


@dataclass(frozen=True)
class MergeSpec:
    """
    Parameters of the stream merge operation.

    By default video and audio are taken from the content file while every other
    stream, the metadata and the attachments come from the base file.
    """

    video_from_content: bool = True
    audio_from_content: bool = True
    use_content_names: bool = False
    # Container extensions (without dot) both sides are filtered by. None keeps
    # every regular file.
    extensions: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class DefaultTrackSpec:
    """Zero-based audio and subtitle stream indexes to mark as default."""

    audio_stream: int = DEFAULT_AUDIO_STREAM
    subtitle_stream: int = DEFAULT_SUBTITLE_STREAM


@dataclass(frozen=True)
class SplitSpec:
    """Optional album-level tags stamped on every split track."""

    artist: Optional[str] = None
    album: Optional[str] = None
    date: Optional[str] = None


@dataclass(frozen=True)
class TimestampEntry:
    """One line of a timestamp list: where a track starts and how it is tagged."""

    disc: int
    track: int
    title: str
    start_time: str


@dataclass(frozen=True)
class EngineInvocation:
    """The arguments of exactly one ffmpeg process, without the executable name."""

    args: List[str]
    quiet: bool = False


@dataclass(frozen=True)
class EngineOutcome:
    """Result of classifying the diagnostic output of one invocation."""

    success: bool
    reason: Optional[str] = None
    failed_lines: List[str] = field(default_factory=list)

    @classmethod
    def succeeded(cls) -> "EngineOutcome":
        return cls(success=True)

    @classmethod
    def failed(cls, reason: str, failed_lines: Optional[List[str]] = None) -> "EngineOutcome":
        return cls(success=False, reason=reason, failed_lines=list(failed_lines or []))

"""
Builds the ffmpeg argument lists of every operation.

All builders share `FfmpegArguments`, which owns the conventions common to every
invocation: the overwrite flag always comes first, inputs are added with '-i',
metadata with '-metadata key=value', and the output path always comes last.
Each builder only adds its own stream mapping, codec and metadata arguments.

The builders are pure: they never touch the filesystem or start a process.
Validation that must happen once per operation (not once per file) lives in
the `validate_*` functions.
"""

from pathlib import Path
from typing import List, Sequence

from loguru import logger

from ..config.audio import (
    AAC_CODECS,
    AUDIO_ONLY_CODEC_FAMILIES,
    CODEC_CONTAINERS,
    DISC_DIR_TEMPLATE,
    ID3V2_VERSION,
    LOW_BITRATE_THRESHOLD,
    PREFERRED_AAC_CODEC,
    SPLIT_FILE_NAME_TEMPLATE,
)
from ..config.common import NO_OVERWRITE_FLAG, OVERWRITE_FLAG
from ..config.video import AV1_ENCODER, PIXEL_FORMAT_10BIT
from ..domain.exceptions import (
    IncompatibleContainerException,
    InvalidSourceException,
    UnsupportedCodecException,
)
from ..domain.models import (
    DefaultTrackSpec,
    MergeSpec,
    SplitSpec,
    TimestampEntry,
    TranscodeSpec,
    VideoTranscodeSpec,
)


class FfmpegArguments:
    """Assembles one ffmpeg argument list in the order ffmpeg expects."""

    def __init__(self, overwrite: bool):
        self._args: List[str] = [OVERWRITE_FLAG if overwrite else NO_OVERWRITE_FLAG]

    def add(self, *args) -> "FfmpegArguments":
        self._args.extend(str(arg) for arg in args)
        return self

    def input(self, path: Path) -> "FfmpegArguments":
        return self.add("-i", path)

    def map(self, stream_spec: str) -> "FfmpegArguments":
        return self.add("-map", stream_spec)

    def metadata(self, key: str, value) -> "FfmpegArguments":
        return self.add("-metadata", f"{key}={value}")

    def stream_copy(self) -> "FfmpegArguments":
        """Copies every selected stream bit for bit instead of re-encoding it."""
        return self.add("-c", "copy")

    def output(self, path: Path) -> List[str]:
        return [*self._args, str(path)]


# --- Audio transcode ---

def validate_audio_transcode(spec: TranscodeSpec) -> None:
    """
    Checks the audio transcode parameters before any file is processed.

    A bitrate that is not a number, one that looks like it was given in bits,
    or the native AAC encoder only produce warnings.

    Raises:
        UnsupportedCodecException: If the codec is not supported.
        IncompatibleContainerException: If the codec cannot go in the container.
    """
    bitrate = spec.bitrate.strip()
    if not bitrate.lower().endswith("k"):
        if not bitrate.isdigit():
            logger.warning(f"Bitrate {bitrate} is not a number, did you mean something like 320k?")
        elif int(bitrate) < LOW_BITRATE_THRESHOLD:
            logger.warning(f"Bitrate {bitrate} seems too low, did you mean {bitrate}k?")

    allowed_containers = CODEC_CONTAINERS.get(spec.codec)
    if allowed_containers is None:
        raise UnsupportedCodecException(
            f"Unsupported codec '{spec.codec}'! Supported codecs: {', '.join(CODEC_CONTAINERS)}."
        )
    if spec.container not in allowed_containers:
        raise IncompatibleContainerException(
            f"The {spec.codec} codec can only be placed in a {' or '.join(allowed_containers)} container, not '{spec.container}'."
        )
    if spec.codec in AAC_CODECS and spec.codec != PREFERRED_AAC_CODEC:
        logger.warning(f"You should use '{PREFERRED_AAC_CODEC}' instead of '{spec.codec}' for better quality!")


def audio_output_path(destination: Path, container: str) -> Path:
    """Applies the target container by replacing the file extension."""
    return destination.with_suffix(f".{container}")


def build_audio_transcode_args(
    source: Path, destination: Path, spec: TranscodeSpec, overwrite: bool
) -> List[str]:
    args = (
        FfmpegArguments(overwrite)
        .input(source)
        .add("-acodec", spec.codec)
        .add("-ab", spec.bitrate)
        .add("-map_metadata", "0")
        .add("-id3v2_version", ID3V2_VERSION)
    )
    if any(family in spec.codec for family in AUDIO_ONLY_CODEC_FAMILIES):
        args.add("-vn")
    return args.output(audio_output_path(destination, spec.container))


# --- Video transcode ---

def build_video_transcode_args(
    source: Path, destination: Path, spec: VideoTranscodeSpec, overwrite: bool
) -> List[str]:
    args = (
        FfmpegArguments(overwrite)
        .input(source)
        .map("0")
        .stream_copy()
        .add("-c:v", AV1_ENCODER)
        .add("-preset", spec.preset)
        .add("-crf", spec.crf)
        .add("-g", spec.keyframe_interval)
    )
    if spec.force_10bit:
        args.add("-pix_fmt", PIXEL_FORMAT_10BIT)
    return args.output(destination)


# --- Stream merge ---

def validate_merge(spec: MergeSpec) -> None:
    """
    Raises:
        InvalidSourceException: If neither video nor audio comes from the content side.
    """
    if not (spec.video_from_content or spec.audio_from_content):
        raise InvalidSourceException(
            "Nothing to merge: at least one of video or audio must come from the content files."
        )


def _content_stream_types(spec: MergeSpec) -> List[str]:
    stream_types = []
    if spec.video_from_content:
        stream_types.append("v")
    if spec.audio_from_content:
        stream_types.append("a")
    return stream_types


def merge_output_path(base: Path, content: Path, destination_dir: Path, spec: MergeSpec) -> Path:
    return destination_dir / (content.name if spec.use_content_names else base.name)


def build_merge_args(
    base: Path, content: Path, destination: Path, spec: MergeSpec, overwrite: bool
) -> List[str]:
    """
    Takes the selected streams from `content` (input 1) and everything else,
    including metadata and attachments, from `base` (input 0).
    """
    content_streams = _content_stream_types(spec)
    args = FfmpegArguments(overwrite).input(base).input(content)
    for stream_type in content_streams:
        args.map(f"1:{stream_type}")
    args.map("0").add("-map_metadata", "0")
    # Drop the base's copy of every stream taken from the content side.
    for stream_type in content_streams:
        args.map(f"-0:{stream_type}")
    return args.stream_copy().output(destination)


# --- Default track rewrite ---

def build_default_tracks_args(
    source: Path, destination: Path, spec: DefaultTrackSpec, overwrite: bool
) -> List[str]:
    return (
        FfmpegArguments(overwrite)
        .input(source)
        .map("0")
        .stream_copy()
        .add("-disposition:a", "0")
        .add("-disposition:s", "0")
        .add(f"-disposition:a:{spec.audio_stream}", "default")
        .add(f"-disposition:s:{spec.subtitle_stream}", "default")
        .output(destination)
    )


# --- Timestamp split ---

def is_multi_disc(timestamps: Sequence[TimestampEntry]) -> bool:
    """A timestamp set is written flat only when every entry is on disc 1."""
    return any(entry.disc != 1 for entry in timestamps)


def split_output_path(
    destination_root: Path, entry: TimestampEntry, extension: str, multi_disc: bool
) -> Path:
    title = entry.title.replace("/", "_").replace("\\", "_")
    file_name = SPLIT_FILE_NAME_TEMPLATE.format(track=entry.track, title=title, ext=extension)
    if multi_disc:
        return destination_root / DISC_DIR_TEMPLATE.format(disc=entry.disc) / file_name
    return destination_root / file_name


def build_split_args(
    source: Path,
    timestamps: Sequence[TimestampEntry],
    index: int,
    destination: Path,
    spec: SplitSpec,
    overwrite: bool,
) -> List[str]:
    """
    Cuts track `index` out of `source`.

    The track ends where the next one starts. The last track runs to the end of
    the file, so it gets no '-to' bound.
    """
    entry = timestamps[index]
    args = FfmpegArguments(overwrite).input(source).add("-ss", entry.start_time)
    if index + 1 < len(timestamps):
        args.add("-to", timestamps[index + 1].start_time)
    args.add("-write_id3v2", "1")

    if spec.artist is not None:
        args.metadata("artist", spec.artist)
        args.metadata("albumartist", spec.artist)
    if spec.album is not None:
        args.metadata("album", spec.album)
    if spec.date is not None:
        args.metadata("date", spec.date)

    args.metadata("title", entry.title)
    args.metadata("disc", entry.disc)
    args.metadata("track", entry.track)
    return args.stream_copy().output(destination)

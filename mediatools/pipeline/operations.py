"""
Top-level operations, one per command.

Each operation picks a traversal strategy (recursive tree mirror, flat
directory listing, or two index-aligned directories), builds one ffmpeg
invocation per discovered file and runs them strictly one after another in
traversal order. The first failing invocation aborts the rest of the operation;
outputs written by earlier invocations are left in place.

Configuration errors are detected in `validate()`, before any file is touched,
and end the operation cleanly. Every other error propagates to the caller.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from loguru import logger

from ..config.video import VIDEO_EXTENSIONS
from ..domain.exceptions import (
    ConfigurationException,
    InvalidSourceException,
    MismatchedInputsException,
    TimestampFileException,
)
from ..domain.models import (
    DefaultTrackSpec,
    EngineInvocation,
    EngineOptions,
    EngineOutcome,
    MergeSpec,
    PathPair,
    SplitSpec,
    TimestampEntry,
    TranscodeSpec,
    VideoTranscodeSpec,
)
from ..services.command_builder import (
    audio_output_path,
    build_audio_transcode_args,
    build_default_tracks_args,
    build_merge_args,
    build_split_args,
    build_video_transcode_args,
    is_multi_disc,
    merge_output_path,
    split_output_path,
    validate_audio_transcode,
    validate_merge,
)
from ..services.file_processing_service import (
    cleanup_file_names,
    flat_pairs,
    has_extension,
    is_file,
    paired_files,
    walk_tree,
)
from ..services.timestamp_parser import parse_timestamps
from ..utils.ffmpeg_utils import run_ffmpeg

Runner = Callable[[EngineInvocation], EngineOutcome]


class BaseOperation:
    """
    Common driver for all operations.

    Subclasses implement `validate()` (optional) and `process()`. The runner that
    executes invocations can be replaced, which the tests use to record
    invocations instead of starting ffmpeg.
    """

    name: str = "operation"
    requires_engine: bool = True

    def __init__(self, options: Optional[EngineOptions] = None, runner: Optional[Runner] = None):
        self.options = options or EngineOptions()
        self.runner = runner or run_ffmpeg
        self.processed_count = 0

    def validate(self):
        pass

    def process(self):
        raise NotImplementedError("Subclasses must implement process().")

    def prepare(self) -> bool:
        """
        Validates the parameters before any file is touched.

        Returns:
            False if the operation was abandoned because of a configuration error.
        """
        try:
            self.validate()
        except ConfigurationException as e:
            logger.error(str(e))
            return False
        return True

    def process_all(self) -> bool:
        """Processes every file of an operation that passed `prepare()`."""
        self.process()
        logger.success(f"{self.name} finished, {self.processed_count} file(s) processed.")
        return True

    def run(self) -> bool:
        """
        Validates the parameters and processes every file.

        Returns:
            False if the operation was abandoned because of a configuration error,
            True once every file has been processed.
        """
        return self.prepare() and self.process_all()

    def execute(self, args: List[str]) -> EngineOutcome:
        outcome = self.runner(EngineInvocation(args=args, quiet=self.options.quiet))
        self.processed_count += 1
        return outcome


class CleanupFileNamesOperation(BaseOperation):
    name = "cleanup-file-names"
    requires_engine = False

    def __init__(self, path: Path, options: Optional[EngineOptions] = None, runner: Optional[Runner] = None):
        super().__init__(options, runner)
        self.path = path

    def process(self):
        logger.info(f"Cleaning up file names in {self.path}")
        self.processed_count = cleanup_file_names(self.path)


class TranscodeAudioOperation(BaseOperation):
    """
    Transcodes a single audio file, or every file below a directory, into
    `destination`, mirroring the source tree.
    """

    name = "transcode-audio"

    def __init__(
        self,
        source: Path,
        destination: Path,
        spec: TranscodeSpec,
        options: Optional[EngineOptions] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(options, runner)
        self.source = source
        self.destination = destination
        self.spec = spec

    def validate(self):
        validate_audio_transcode(self.spec)

    def _pairs(self) -> Iterable[PathPair]:
        if self.source.is_file():
            return [PathPair(self.source, self.destination / self.source.name)]
        predicate = has_extension(self.spec.src_container) if self.spec.src_container else is_file
        return walk_tree(self.source, self.destination, predicate)

    def process(self):
        self.destination.mkdir(parents=True, exist_ok=True)
        for pair in self._pairs():
            pair.destination.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Transcoding {pair.source} -> {audio_output_path(pair.destination, self.spec.container)}")
            self.execute(
                build_audio_transcode_args(pair.source, pair.destination, self.spec, self.options.overwrite)
            )


class TranscodeVideoOperation(BaseOperation):
    """Re-encodes the video stream of every mkv/mp4/mov file below `source` to AV1."""

    name = "transcode-video"

    def __init__(
        self,
        source: Path,
        destination: Path,
        spec: VideoTranscodeSpec,
        options: Optional[EngineOptions] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(options, runner)
        self.source = source
        self.destination = destination
        self.spec = spec

    def process(self):
        self.destination.mkdir(parents=True, exist_ok=True)
        for pair in walk_tree(self.source, self.destination, has_extension(*VIDEO_EXTENSIONS)):
            pair.destination.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Transcoding {pair.source} -> {pair.destination}")
            self.execute(
                build_video_transcode_args(pair.source, pair.destination, self.spec, self.options.overwrite)
            )


class MergeVideosOperation(BaseOperation):
    """
    Combines the n-th file of `base_dir` with the n-th file of `content_dir`.

    Both directories must hold the same number of (matching) files.
    """

    name = "merge-videos"

    def __init__(
        self,
        base_dir: Path,
        content_dir: Path,
        destination: Path,
        spec: MergeSpec,
        options: Optional[EngineOptions] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(options, runner)
        self.base_dir = base_dir
        self.content_dir = content_dir
        self.destination = destination
        self.spec = spec
        self.base_files: List[Path] = []
        self.content_files: List[Path] = []

    def validate(self):
        validate_merge(self.spec)
        predicate = has_extension(*self.spec.extensions) if self.spec.extensions else is_file
        self.base_files, self.content_files = paired_files(self.base_dir, self.content_dir, predicate)
        if len(self.base_files) != len(self.content_files):
            raise MismatchedInputsException(
                f"The base directory has {len(self.base_files)} files, but the stream directory has "
                f"{len(self.content_files)} files! There must be the same amount of files in both directories."
            )

    def process(self):
        self.destination.mkdir(parents=True, exist_ok=True)
        for base_file, content_file in zip(self.base_files, self.content_files):
            logger.info(f"Combining '{base_file.name}' with '{content_file.name}'")
            output = merge_output_path(base_file, content_file, self.destination, self.spec)
            self.execute(build_merge_args(base_file, content_file, output, self.spec, self.options.overwrite))


class SetDefaultTracksOperation(BaseOperation):
    """Rewrites the default audio and subtitle track of the top-level mkv/mp4/mov files."""

    name = "set-default-tracks"

    def __init__(
        self,
        source: Path,
        destination: Path,
        spec: DefaultTrackSpec,
        options: Optional[EngineOptions] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(options, runner)
        self.source = source
        self.destination = destination
        self.spec = spec

    def validate(self):
        if self.spec.audio_stream < 0 or self.spec.subtitle_stream < 0:
            raise InvalidSourceException("Stream indexes must be zero or greater.")

    def process(self):
        self.destination.mkdir(parents=True, exist_ok=True)
        for pair in flat_pairs(self.source, self.destination, has_extension(*VIDEO_EXTENSIONS)):
            logger.info(f"Setting default tracks {pair.source} -> {pair.destination}")
            self.execute(
                build_default_tracks_args(pair.source, pair.destination, self.spec, self.options.overwrite)
            )


class SplitAudioOperation(BaseOperation):
    """
    Splits one long audio file into tracks described by a timestamp file.

    Tracks go straight into `destination` when every entry is on disc 1, and
    into one `CD<disc>` subdirectory per disc otherwise.
    """

    name = "split-audio"

    def __init__(
        self,
        source_file: Path,
        destination: Path,
        timestamps_file: Path,
        spec: SplitSpec,
        options: Optional[EngineOptions] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(options, runner)
        self.source_file = source_file
        self.destination = destination
        self.timestamps_file = timestamps_file
        self.spec = spec
        self.extension = ""
        self.timestamps: List[TimestampEntry] = []

    def validate(self):
        self.extension = self.source_file.suffix.lstrip(".")
        if not self.extension:
            raise InvalidSourceException(f"No extension on source file '{self.source_file}'!")
        try:
            text = self.timestamps_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise TimestampFileException(
                f"Timestamp file '{self.timestamps_file}' is not valid UTF-8 ({e.reason} at byte {e.start})"
            ) from e
        self.timestamps = parse_timestamps(text)

    def process(self):
        if not self.timestamps:
            logger.warning(f"No timestamps found in {self.timestamps_file}, nothing to split.")
            return

        self.destination.mkdir(parents=True, exist_ok=True)
        multi_disc = is_multi_disc(self.timestamps)
        for index, entry in enumerate(self.timestamps):
            output = split_output_path(self.destination, entry, self.extension, multi_disc)
            output.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Splitting disc {entry.disc} track {entry.track} '{entry.title}' -> {output}")
            self.execute(
                build_split_args(
                    self.source_file, self.timestamps, index, output, self.spec, self.options.overwrite
                )
            )

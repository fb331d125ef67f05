from pathlib import Path

import pytest

from mediatools.domain.exceptions import (
    DirectoryReadException,
    EngineFailureException,
    TimestampFileException,
    TimestampParseException,
)
from mediatools.domain.models import (
    DefaultTrackSpec,
    EngineOptions,
    MergeSpec,
    SplitSpec,
    TranscodeSpec,
    VideoTranscodeSpec,
)
from mediatools.pipeline.operations import (
    CleanupFileNamesOperation,
    MergeVideosOperation,
    SetDefaultTracksOperation,
    SplitAudioOperation,
    TranscodeAudioOperation,
    TranscodeVideoOperation,
)
from tests.conftest import RecordingRunner, touch


def _inputs(args):
    return [args[i + 1] for i, arg in enumerate(args[:-1]) if arg == "-i"]


# --- Cleanup ---

def test_cleanup_operation_never_runs_ffmpeg(tmp_path, runner):
    touch(tmp_path / "Song [123].flac")

    operation = CleanupFileNamesOperation(tmp_path, runner=runner)

    assert operation.requires_engine is False
    assert operation.run() is True
    assert operation.processed_count == 1
    assert (tmp_path / "Song.flac").exists()
    assert runner.invocations == []


# --- Audio transcode ---

def test_transcode_audio_mirrors_tree(tmp_path, runner):
    src, dest = tmp_path / "src", tmp_path / "dest"
    touch(src / "a.flac")
    touch(src / "Disc 1" / "b.flac")
    touch(src / "Disc 1" / "deeper" / "c.flac")

    ok = TranscodeAudioOperation(
        src, dest, TranscodeSpec(bitrate="192k", codec="opus", container="ogg"),
        EngineOptions(overwrite=True, quiet=True), runner,
    ).run()

    assert ok is True
    assert [args[-1] for args in runner.args] == [
        str(dest / "Disc 1" / "b.ogg"),
        str(dest / "Disc 1" / "deeper" / "c.ogg"),
        str(dest / "a.ogg"),
    ]
    assert (dest / "Disc 1" / "deeper").is_dir()
    assert all(invocation.quiet for invocation in runner.invocations)
    assert all(args[0] == "-y" for args in runner.args)


def test_transcode_audio_source_container_filter(tmp_path, runner):
    src = tmp_path / "src"
    touch(src / "a.flac")
    touch(src / "cover.jpg")
    touch(src / "notes.txt")

    TranscodeAudioOperation(
        src, tmp_path / "dest", TranscodeSpec(src_container="flac"), runner=runner
    ).run()

    assert [_inputs(args) for args in runner.args] == [[str(src / "a.flac")]]


def test_transcode_audio_single_file(tmp_path, runner):
    source = touch(tmp_path / "live.wav")

    TranscodeAudioOperation(source, tmp_path / "out", TranscodeSpec(), runner=runner).run()

    assert runner.args[0][-1] == str(tmp_path / "out" / "live.mp3")


def test_transcode_audio_rejects_incompatible_pair_before_touching_files(tmp_path, runner, log_messages):
    src = tmp_path / "src"
    touch(src / "a.flac")

    ok = TranscodeAudioOperation(
        src, tmp_path / "dest", TranscodeSpec(codec="mp3", container="wav"), runner=runner
    ).run()

    assert ok is False
    assert runner.invocations == []
    assert not (tmp_path / "dest").exists()
    assert any(message.startswith("ERROR") and "mp3" in message for message in log_messages)


def test_transcode_audio_engine_failure_aborts_remaining_files(tmp_path):
    src = tmp_path / "src"
    for name in ["1.flac", "2.flac", "3.flac"]:
        touch(src / name)
    failing = RecordingRunner(fail_on_call=2)

    with pytest.raises(EngineFailureException):
        TranscodeAudioOperation(src, tmp_path / "dest", TranscodeSpec(), runner=failing).run()

    assert len(failing.invocations) == 2


def test_transcode_audio_missing_source_is_fatal(tmp_path, runner):
    with pytest.raises(DirectoryReadException):
        TranscodeAudioOperation(tmp_path / "missing", tmp_path / "dest", TranscodeSpec(), runner=runner).run()


# --- Video transcode ---

def test_transcode_video_only_picks_video_containers(tmp_path, runner):
    src, dest = tmp_path / "src", tmp_path / "dest"
    touch(src / "a.MKV")
    touch(src / "b.avi")
    touch(src / "season" / "c.mp4")
    touch(src / "season" / "d.mov")

    TranscodeVideoOperation(src, dest, VideoTranscodeSpec(force_10bit=True), runner=runner).run()

    assert [args[-1] for args in runner.args] == [
        str(dest / "a.MKV"),
        str(dest / "season" / "c.mp4"),
        str(dest / "season" / "d.mov"),
    ]
    assert all("yuv420p10le" in args for args in runner.args)
    assert (dest / "season").is_dir()


def test_transcode_video_into_destination_inside_source(tmp_path):
    touch(tmp_path / "a.mkv")

    class WritingRunner(RecordingRunner):
        def __call__(self, invocation):
            touch(Path(invocation.args[-1]))
            return super().__call__(invocation)

    writing = WritingRunner()
    operation = TranscodeVideoOperation(tmp_path, tmp_path / "av1", VideoTranscodeSpec(), runner=writing)
    operation.run()

    assert [args[-1] for args in writing.args] == [str(tmp_path / "av1" / "a.mkv")]
    assert operation.processed_count == 1


# --- Merge ---

def test_merge_pairs_files_by_index(tmp_path, runner):
    base, content = tmp_path / "base", tmp_path / "content"
    for name in ["ep1.mkv", "ep2.mkv", "ep3.mkv"]:
        touch(base / name)
    for name in ["E01.mp4", "E02.mp4", "E03.mp4"]:
        touch(content / name)

    ok = MergeVideosOperation(base, content, tmp_path / "out", MergeSpec(), runner=runner).run()

    assert ok is True
    assert len(runner.invocations) == 3
    assert [_inputs(args) for args in runner.args] == [
        [str(base / "ep1.mkv"), str(content / "E01.mp4")],
        [str(base / "ep2.mkv"), str(content / "E02.mp4")],
        [str(base / "ep3.mkv"), str(content / "E03.mp4")],
    ]
    assert runner.args[0][-1] == str(tmp_path / "out" / "ep1.mkv")


def test_merge_can_name_outputs_after_content(tmp_path, runner):
    touch(tmp_path / "base" / "ep1.mkv")
    touch(tmp_path / "content" / "E01.mp4")

    MergeVideosOperation(
        tmp_path / "base", tmp_path / "content", tmp_path / "out",
        MergeSpec(use_content_names=True), runner=runner,
    ).run()

    assert runner.args[0][-1] == str(tmp_path / "out" / "E01.mp4")


def test_merge_mismatched_lengths_runs_nothing(tmp_path, runner, log_messages):
    touch(tmp_path / "base" / "ep1.mkv")
    touch(tmp_path / "base" / "ep2.mkv")
    touch(tmp_path / "content" / "E01.mp4")

    ok = MergeVideosOperation(
        tmp_path / "base", tmp_path / "content", tmp_path / "out", MergeSpec(), runner=runner
    ).run()

    assert ok is False
    assert runner.invocations == []
    assert any("The base directory has 2 files, but the stream directory has 1 files" in m for m in log_messages)


def test_merge_extension_filter(tmp_path, runner):
    touch(tmp_path / "base" / "ep1.mkv")
    touch(tmp_path / "base" / "ep1.nfo")
    touch(tmp_path / "content" / "E01.mkv")

    ok = MergeVideosOperation(
        tmp_path / "base", tmp_path / "content", tmp_path / "out",
        MergeSpec(extensions=("mkv",)), runner=runner,
    ).run()

    assert ok is True
    assert len(runner.invocations) == 1


def test_merge_without_content_streams_is_a_configuration_error(tmp_path, runner):
    touch(tmp_path / "base" / "ep1.mkv")
    touch(tmp_path / "content" / "E01.mkv")

    ok = MergeVideosOperation(
        tmp_path / "base", tmp_path / "content", tmp_path / "out",
        MergeSpec(video_from_content=False, audio_from_content=False), runner=runner,
    ).run()

    assert ok is False
    assert runner.invocations == []


# --- Default tracks ---

def test_set_default_tracks_is_flat_and_filtered(tmp_path, runner):
    src, dest = tmp_path / "src", tmp_path / "dest"
    touch(src / "a.mkv")
    touch(src / "b.srt")
    touch(src / "nested" / "c.mkv")

    SetDefaultTracksOperation(src, dest, DefaultTrackSpec(audio_stream=1), runner=runner).run()

    assert len(runner.invocations) == 1
    assert runner.args[0][-1] == str(dest / "a.mkv")
    assert "-disposition:a:1" in runner.args[0]


# --- Split ---

def _split(tmp_path, runner, timestamps: str, source_name: str = "album.flac", spec=None):
    source = touch(tmp_path / source_name)
    timestamps_file = touch(tmp_path / "timestamps.txt", timestamps)
    operation = SplitAudioOperation(source, tmp_path / "out", timestamps_file, spec or SplitSpec(), runner=runner)
    return operation.run()


def test_split_single_disc_is_flat(tmp_path, runner):
    _split(tmp_path, runner, "1 1 One 0:00\n1 2 Two 3:10\n1 3 Three 7:45\n")

    assert [args[-1] for args in runner.args] == [
        str(tmp_path / "out" / "01. One.flac"),
        str(tmp_path / "out" / "02. Two.flac"),
        str(tmp_path / "out" / "03. Three.flac"),
    ]
    assert not any(path.name.startswith("CD") for path in (tmp_path / "out").iterdir())


def test_split_multi_disc_uses_cd_directories(tmp_path, runner):
    _split(tmp_path, runner, "1 1 One 0:00\n1 2 Two 3:10\n2 1 Three 1:02:00\n")

    out = tmp_path / "out"
    assert [args[-1] for args in runner.args] == [
        str(out / "CD1" / "01. One.flac"),
        str(out / "CD1" / "02. Two.flac"),
        str(out / "CD2" / "01. Three.flac"),
    ]
    assert (out / "CD1").is_dir() and (out / "CD2").is_dir()


def test_split_bounds(tmp_path, runner):
    _split(tmp_path, runner, "1 1 One 0:00\n1 2 Two 3:10\n1 3 Three 7:45\n")

    first, second, last = runner.args
    assert first[first.index("-ss") + 1] == "0:00" and first[first.index("-to") + 1] == "3:10"
    assert second[second.index("-ss") + 1] == "3:10" and second[second.index("-to") + 1] == "7:45"
    assert last[last.index("-ss") + 1] == "7:45" and "-to" not in last


def test_split_malformed_line_is_fatal(tmp_path, runner):
    with pytest.raises(TimestampParseException, match="garbage line"):
        _split(tmp_path, runner, "1 1 One 0:00\ngarbage line\n")

    assert runner.invocations == []


def test_split_source_without_extension(tmp_path, runner):
    assert _split(tmp_path, runner, "1 1 One 0:00\n", source_name="album") is False
    assert runner.invocations == []


def test_split_empty_timestamp_file(tmp_path, runner, log_messages):
    assert _split(tmp_path, runner, "\n\n") is True
    assert runner.invocations == []
    assert any(message.startswith("WARNING No timestamps") for message in log_messages)


def test_split_timestamp_file_that_is_not_utf8(tmp_path, runner):
    source = touch(tmp_path / "album.flac")
    timestamps_file = tmp_path / "timestamps.txt"
    timestamps_file.write_bytes(b"1 1 Caf\xe9 0:00\n")

    with pytest.raises(TimestampFileException, match="timestamps.txt"):
        SplitAudioOperation(source, tmp_path / "out", timestamps_file, SplitSpec(), runner=runner).run()

    assert runner.invocations == []

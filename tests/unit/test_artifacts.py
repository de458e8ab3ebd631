from __future__ import annotations

from unittest.mock import patch

from quizverify.artifacts import NullRecorder, ScreenshotRecorder, artifact_file_name
from quizverify.errors import ArtifactCaptureError


class _ShotBackend:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    def screenshot_png(self) -> bytes:
        if self.fail:
            raise RuntimeError("target closed")
        return b"\x89PNG"


def test_capture_creates_directory_and_writes_png(tmp_path) -> None:
    out = tmp_path / "nested" / "screenshots"
    recorder = ScreenshotRecorder(_ShotBackend(), out)

    path = recorder.capture("01_LandingPage")

    assert path == out / "01_LandingPage.png"
    assert path.read_bytes() == b"\x89PNG"
    assert recorder.captured == [path]
    assert recorder.errors == []


def test_capture_into_existing_directory_is_idempotent(tmp_path) -> None:
    recorder = ScreenshotRecorder(_ShotBackend(), tmp_path)
    recorder.capture("a")
    recorder.capture("a")
    assert (tmp_path / "a.png").exists()
    assert len(recorder.captured) == 2


def test_engine_failure_is_recorded_not_raised(tmp_path, caplog) -> None:
    recorder = ScreenshotRecorder(_ShotBackend(fail=True), tmp_path)

    with caplog.at_level("WARNING"):
        assert recorder.capture("02_FirstQuestionDisplayed") is None

    assert len(recorder.errors) == 1
    assert isinstance(recorder.errors[0], ArtifactCaptureError)
    assert recorder.errors[0].label == "02_FirstQuestionDisplayed"
    assert "target closed" in caplog.text


def test_io_failure_is_recorded_not_raised(tmp_path) -> None:
    recorder = ScreenshotRecorder(_ShotBackend(), tmp_path)
    with patch("pathlib.Path.write_bytes", side_effect=OSError("read-only file system")):
        assert recorder.capture("x") is None
    assert "read-only" in str(recorder.errors[0])
    assert recorder.captured == []


def test_file_names_are_sanitized() -> None:
    assert artifact_file_name("03_Question1_Answered") == "03_Question1_Answered.png"
    assert artifact_file_name("../etc/passwd") == "etc_passwd.png"
    assert artifact_file_name("a b/c") == "a_b_c.png"
    assert artifact_file_name("///") == "artifact.png"


def test_null_recorder_writes_nothing(tmp_path) -> None:
    recorder = NullRecorder()
    assert recorder.capture("anything") is None
    assert list(tmp_path.iterdir()) == []


def test_output_directory_is_created_with_the_recorder(tmp_path) -> None:
    out = tmp_path / "screenshots"
    ScreenshotRecorder(_ShotBackend(fail=True), out)
    assert out.is_dir()


def test_unwritable_output_directory_does_not_raise_at_setup(tmp_path, caplog) -> None:
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory")
    with caplog.at_level("WARNING"):
        recorder = ScreenshotRecorder(_ShotBackend(), blocker / "screenshots")
    assert "Could not create" in caplog.text
    assert recorder.capture("01_LandingPage") is None
    assert len(recorder.errors) == 1

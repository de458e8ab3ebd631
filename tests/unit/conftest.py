from __future__ import annotations

from typing import Any

import pytest

from quizverify.config import RunnerConfig
from quizverify.errors import BrowserActionError
from quizverify.scenario import StepContext
from quizverify.verification import CheckpointVerifier
from quizverify.wait import ConditionWaiter

DEFAULT_QUESTIONS = [
    ("What is the chemical symbol for water?", ["H2O", "CO2", "O2", "NaCl"], 0),
    ("What planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1),
    ("What is the largest mammal?", ["Elephant", "Giraffe", "Blue Whale", "Hippo"], 2),
]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeQuizBackend:
    """
    In-memory stand-in for the quiz page.

    Rendering after start/next/submit completes only after `render_polls` calls to
    count(), which is how conditions probe the document.
    """

    def __init__(
        self,
        *,
        questions: list[tuple[str, list[str], int]] | None = None,
        title: str = "Dynamic Quiz App",
        url_name: str = "quiz_app.html",
        submit_label: str = "Submit",
        charts_visible: bool = True,
        render_polls: int = 1,
        fail_screenshots: bool = False,
    ) -> None:
        self.questions = questions if questions is not None else [list(q) for q in DEFAULT_QUESTIONS]
        self._title = title
        self.url_name = url_name
        self.submit_label = submit_label
        self.charts_visible = charts_visible
        self.render_polls = render_polls
        self.fail_screenshots = fail_screenshots

        self.url = "about:blank"
        self.screen = "blank"
        self.selected: dict[str, str] = {}
        self.current = 0
        self.answers: dict[int, int] = {}
        self.pending = 0
        self.calls: list[tuple[Any, ...]] = []
        self.screenshots = 0

    # -- engine capability set --

    def goto(self, url: str) -> None:
        self.calls.append(("goto", url))
        self.url = url.rsplit("/", 1)[0] + "/" + self.url_name
        self.screen = "landing"

    def title(self) -> str:
        return self._title if self.screen != "blank" else ""

    def current_url(self) -> str:
        return self.url

    def count(self, selector: str) -> int:
        n = len(self._elements(selector))
        if self.pending > 0:
            self.pending -= 1
        return n

    def inner_text(self, selector: str, index: int = 0) -> str:
        elements = self._elements(selector)
        if index >= len(elements):
            raise BrowserActionError(f"no element {selector}[{index}]")
        return elements[index][0]

    def is_visible(self, selector: str, index: int = 0) -> bool:
        elements = self._elements(selector)
        return index < len(elements) and elements[index][1]

    def click(self, selector: str, index: int = 0) -> None:
        self.calls.append(("click", selector, index))
        if index >= len(self._elements(selector)):
            raise BrowserActionError(f"no element {selector}[{index}]")
        if selector == "#start-btn":
            self.screen = "quiz"
            self.current = 0
            self.pending = self.render_polls
        elif selector == ".option-label":
            self.answers[self.current] = index
        elif selector == "#next-btn":
            if self.current < len(self.questions) - 1:
                self.current += 1
            else:
                self.screen = "results"
            self.pending = self.render_polls

    def select_option(self, selector: str, value: str) -> None:
        self.calls.append(("select", selector, value))
        if not self._elements(selector):
            raise BrowserActionError(f"no element {selector}")
        self.selected[selector] = value

    def screenshot_png(self) -> bytes:
        if self.fail_screenshots:
            raise OSError("disk full")
        self.screenshots += 1
        return b"\x89PNG fake"

    # -- document model --

    def _elements(self, selector: str) -> list[tuple[str, bool]]:
        if self.screen == "landing":
            return {
                "#category": [("Science", True)],
                "#difficulty": [("Easy", True)],
                "#start-btn": [("Start Quiz", True)],
            }.get(selector, [])
        if self.screen == "quiz":
            text, options, _ = self.questions[self.current]
            last = self.current == len(self.questions) - 1
            if self.pending > 0:
                return {"#next-btn": [("Next", True)]}.get(selector, [])
            return {
                "#question-text": [(text, True)],
                ".option-label": [(o, True) for o in options],
                "#next-btn": [(self.submit_label if last else "Next", True)],
            }.get(selector, [])
        if self.screen == "results":
            if self.pending > 0:
                return []
            correct = sum(1 for i, q in enumerate(self.questions) if self.answers.get(i) == q[2])
            total = len(self.questions)
            return {
                "#score-text": [(f"{correct} / {total}", True)],
                "#correct-count": [(str(correct), True)],
                "#incorrect-count": [(str(total - correct), True)],
                "#performance-chart": [("", self.charts_visible)],
                "#time-chart": [("", self.charts_visible)],
            }.get(selector, [])
        return []


class RecordingRecorder:
    def __init__(self) -> None:
        self.labels: list[str] = []
        self.captured: list[str] = []
        self.errors: list[Exception] = []

    def capture(self, label: str):
        self.labels.append(label)
        return None


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_backend():
    return FakeQuizBackend


@pytest.fixture
def make_context(fake_clock):
    def _make(backend, recorder=None, *, timeout_s: float = 2.0, poll_s: float = 0.1) -> StepContext:
        config = RunnerConfig(timeout_s=timeout_s, poll_s=poll_s, screenshots=False)
        return StepContext(
            backend=backend,
            waiter=ConditionWaiter(
                backend,
                timeout_s=timeout_s,
                poll_s=poll_s,
                clock=fake_clock,
                sleep=fake_clock.sleep,
            ),
            verifier=CheckpointVerifier(),
            recorder=recorder if recorder is not None else RecordingRecorder(),
            config=config,
        )

    return _make

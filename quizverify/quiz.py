"""
The quiz journey as a checkpoint chain.

    not_started -> landing -> [configured] -> question(1) -> ... -> question(K)
                -> results -> finished

Options are addressed by position. Each QuestionExpectation names the index of
the correct option and the label expected there; the option list is never
searched by label, so a reordered option list fails the checkpoint instead of
silently passing.
"""

from __future__ import annotations

import logging

from .artifacts import ArtifactRecorder, NullRecorder, ScreenshotRecorder
from .backends.protocol import BrowserBackend
from .browser import QuizBrowser, resolve_target
from .conditions import TextEquals, VisibleAt
from .config import RunnerConfig
from .locators import Locator
from .models import QuizFixture, ScenarioResult
from .scenario import (
    CONFIGURED,
    FINISHED,
    LANDING,
    NOT_STARTED,
    RESULTS,
    Checkpoint,
    RunnerState,
    ScenarioRunner,
    StepContext,
)
from .verification import CheckpointVerifier
from .wait import ConditionWaiter

logger = logging.getLogger(__name__)

CATEGORY_SELECT = Locator.by_id("category")
DIFFICULTY_SELECT = Locator.by_id("difficulty")
START_BUTTON = Locator.by_id("start-btn")
QUESTION_TEXT = Locator.by_id("question-text")
OPTION_LABELS = Locator.by_css(".option-label")
NEXT_BUTTON = Locator.by_id("next-btn")
SCORE_TEXT = Locator.by_id("score-text")
CORRECT_COUNT = Locator.by_id("correct-count")
INCORRECT_COUNT = Locator.by_id("incorrect-count")


def _artifact(index: int, label: str) -> str:
    return f"{index:02d}_{label}"


def _landing_step(fixture: QuizFixture, artifact: str):
    def body(ctx: StepContext) -> None:
        ctx.backend.goto(resolve_target(ctx.config.entry))
        title = ctx.backend.title()
        url = ctx.backend.current_url()
        logger.info(f"Page Title: {title}")
        logger.info(f"Page URL: {url}")

        ctx.verifier.equals(title, fixture.title, "Page title is incorrect.")
        ctx.verifier.true(url.endswith(fixture.entry_name), "Page URL is incorrect.")
        ctx.capture(artifact)

    return body


def _start_step(fixture: QuizFixture, artifact: str):
    first = fixture.questions[0]

    def body(ctx: StepContext) -> None:
        ctx.backend.select_option(CATEGORY_SELECT.selector, fixture.category)
        ctx.backend.select_option(DIFFICULTY_SELECT.selector, fixture.difficulty)
        ctx.backend.click(START_BUTTON.selector)

        ctx.waiter.until(VisibleAt(QUESTION_TEXT))
        ctx.verifier.true(ctx.backend.is_visible(QUESTION_TEXT.selector), "Quiz screen did not appear.")
        ctx.verifier.equals(
            ctx.backend.inner_text(QUESTION_TEXT.selector),
            first.text,
            "First question text is incorrect.",
        )
        ctx.capture(artifact)

    return body


def _answer_step(fixture: QuizFixture, number: int, artifact: str):
    question = fixture.questions[number - 1]
    is_last = number == len(fixture.questions)
    option = OPTION_LABELS.nth(question.correct_index)

    def body(ctx: StepContext) -> None:
        available = ctx.backend.count(option.selector)
        ctx.verifier.true(
            available > option.index,
            f"Question {number} has no option at index {option.index} ({available} rendered).",
        )
        ctx.verifier.equals(
            ctx.backend.inner_text(option.selector, option.index),
            question.correct_label,
            f"Option {option.index} of question {number} is incorrect.",
        )
        ctx.backend.click(option.selector, option.index)
        ctx.capture(artifact)

        if not is_last:
            ctx.backend.click(NEXT_BUTTON.selector)
            following = fixture.questions[number]
            ctx.waiter.until(TextEquals(QUESTION_TEXT, following.text))
            return

        ctx.verifier.equals(
            ctx.backend.inner_text(NEXT_BUTTON.selector),
            fixture.submit_label,
            f"Button text should be '{fixture.submit_label}' on last question.",
        )
        ctx.backend.click(NEXT_BUTTON.selector)

    return body


def _results_step(fixture: QuizFixture, artifact: str):
    def body(ctx: StepContext) -> None:
        ctx.waiter.until(VisibleAt(SCORE_TEXT))
        ctx.verifier.equals(
            ctx.backend.inner_text(SCORE_TEXT.selector), fixture.score_text, "Final score is incorrect."
        )
        ctx.verifier.equals(
            ctx.backend.inner_text(CORRECT_COUNT.selector),
            fixture.correct_count,
            "Correct count is incorrect.",
        )
        ctx.verifier.equals(
            ctx.backend.inner_text(INCORRECT_COUNT.selector),
            fixture.incorrect_count,
            "Incorrect count is incorrect.",
        )
        for chart_id in fixture.chart_ids:
            chart = Locator.by_id(chart_id)
            ctx.verifier.true(ctx.backend.is_visible(chart.selector), f"Chart {chart_id} is not displayed.")

        logger.info("Results Verified Successfully!")
        ctx.capture(artifact)

    return body


def build_quiz_checkpoints(fixture: QuizFixture | None = None) -> list[Checkpoint]:
    """Checkpoint chain for the quiz journey described by fixture."""
    fixture = fixture or QuizFixture()
    total = len(fixture.questions)
    checkpoints = [
        Checkpoint(1, "LandingPage", NOT_STARTED, LANDING, _landing_step(fixture, _artifact(1, "LandingPage"))),
        Checkpoint(
            2,
            "FirstQuestionDisplayed",
            LANDING,
            RunnerState.at_question(1),
            _start_step(fixture, _artifact(2, "FirstQuestionDisplayed")),
            via=(CONFIGURED,),
        ),
    ]
    for number in range(1, total + 1):
        index = len(checkpoints) + 1
        label = f"Question{number}_Answered"
        target = RunnerState.at_question(number + 1) if number < total else RESULTS
        checkpoints.append(
            Checkpoint(
                index,
                label,
                RunnerState.at_question(number),
                target,
                _answer_step(fixture, number, _artifact(index, label)),
            )
        )
    index = len(checkpoints) + 1
    checkpoints.append(
        Checkpoint(
            index,
            "ResultAnalysisPage",
            RESULTS,
            FINISHED,
            _results_step(fixture, _artifact(index, "ResultAnalysisPage")),
        )
    )
    return checkpoints


def build_context(
    backend: BrowserBackend,
    config: RunnerConfig,
    *,
    recorder: ArtifactRecorder | None = None,
) -> StepContext:
    if recorder is None:
        recorder = ScreenshotRecorder(backend, config.screenshots_dir) if config.screenshots else NullRecorder()
    return StepContext(
        backend=backend,
        waiter=ConditionWaiter(backend, timeout_s=config.timeout_s, poll_s=config.poll_s),
        verifier=CheckpointVerifier(),
        recorder=recorder,
        config=config,
    )


def run_quiz_scenario(
    config: RunnerConfig | None = None,
    fixture: QuizFixture | None = None,
) -> ScenarioResult:
    """
    Open a browser, walk the whole quiz, and close the browser.

    Raises:
        SessionInitError: If the browser cannot be started
    """
    config = config or RunnerConfig()
    runner = ScenarioRunner(build_quiz_checkpoints(fixture))
    with QuizBrowser(config) as browser:
        result = runner.run(build_context(browser.backend, config))
    logger.info(f"Scenario {result.status} at state {result.final_state}")
    return result

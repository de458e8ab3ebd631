"""
Pydantic models for quizverify - fixture literals and run results.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class QuestionExpectation(BaseModel):
    """One question's expected text and the correct option, addressed by position."""

    text: str
    correct_index: int = Field(ge=0)
    correct_label: str


class QuizFixture(BaseModel):
    """
    Literal contract asserted against the quiz application.

    Defaults are the values the bundled quiz_app.html renders; they must match it
    verbatim.
    """

    title: str = "Dynamic Quiz App"
    entry_name: str = "quiz_app.html"
    category: str = "science"
    difficulty: str = "easy"
    questions: list[QuestionExpectation] = Field(
        default_factory=lambda: [
            QuestionExpectation(
                text="What is the chemical symbol for water?", correct_index=0, correct_label="H2O"
            ),
            QuestionExpectation(
                text="What planet is known as the Red Planet?", correct_index=1, correct_label="Mars"
            ),
            QuestionExpectation(
                text="What is the largest mammal?", correct_index=2, correct_label="Blue Whale"
            ),
        ]
    )
    submit_label: str = "Submit"
    score_text: str = "3 / 3"
    correct_count: str = "3"
    incorrect_count: str = "0"
    chart_ids: list[str] = Field(default_factory=lambda: ["performance-chart", "time-chart"])

    @model_validator(mode="after")
    def _has_questions(self) -> QuizFixture:
        if not self.questions:
            raise ValueError("fixture needs at least one question")
        return self


class AssertOutcome(BaseModel):
    label: str
    passed: bool
    actual: Any = None
    expected: Any = None


class FailureInfo(BaseModel):
    """Structured reason for a failed run."""

    kind: str
    message: str
    checkpoint: int | None = None
    expected: Any = None
    actual: Any = None
    condition: str | None = None
    elapsed_ms: int | None = None


class CheckpointResult(BaseModel):
    index: int
    label: str
    source: str
    target: str
    status: Literal["passed", "failed", "skipped"]
    duration_ms: int = 0
    assertions: list[AssertOutcome] = Field(default_factory=list)
    error: str | None = None


class ScenarioResult(BaseModel):
    status: Literal["passed", "failed"]
    final_state: str
    checkpoints: list[CheckpointResult] = Field(default_factory=list)
    failure: FailureInfo | None = None
    artifacts: list[str] = Field(default_factory=list)
    artifact_errors: list[str] = Field(default_factory=list)
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.status == "passed"

"""
Question pipeline - descriptors for every prompt of a piar run.

All defaults are derived from the branch inventory before anything is asked;
the prompt collector then walks the list strictly in order.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator

from piar.branches import BranchInventory, compare_branches


class QuestionKind(str, Enum):
    TOGGLE = "toggle"
    SELECT = "select"
    MULTISELECT = "multiselect"
    TEXT = "text"
    AUTOCOMPLETE = "autocomplete"


SELECT_KINDS = (QuestionKind.SELECT, QuestionKind.MULTISELECT, QuestionKind.AUTOCOMPLETE)

# Keys answered by the branch questions; config questions may not reuse them.
BRANCH_KEYS = ("draft", "base", "compare")


class Choice(BaseModel):
    """One selectable option. ``value`` defaults to the label."""

    label: str = Field(validation_alias=AliasChoices("label", "title"))
    value: Any = None

    @model_validator(mode="before")
    @classmethod
    def _fill_value(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"label": data, "value": data}
        if isinstance(data, dict) and "value" not in data:
            return {**data, "value": data.get("label", data.get("title"))}
        return data


class Question(BaseModel):
    """
    A single prompt.

    Select kinds use ``initial`` (a position, or positions for multiselect)
    into ``choices``; text and toggle kinds use ``default``.
    """

    kind: QuestionKind = Field(validation_alias=AliasChoices("kind", "type"))
    key: str = Field(min_length=1, validation_alias=AliasChoices("key", "name"))
    message: str
    choices: list[Choice] = Field(default_factory=list)
    initial: int | list[int] | None = None
    default: Any = None

    @model_validator(mode="before")
    @classmethod
    def _initial_as_default(cls, data: Any) -> Any:
        # text/toggle configs may spell their default as ``initial``
        if not isinstance(data, dict) or "initial" not in data or "default" in data:
            return data
        kind = data.get("kind", data.get("type"))
        if kind in (QuestionKind.TEXT, QuestionKind.TOGGLE, "text", "toggle"):
            data = dict(data)
            data["default"] = data.pop("initial")
        return data

    @model_validator(mode="after")
    def _check_choices(self) -> Question:
        if self.kind not in SELECT_KINDS:
            if self.initial is not None:
                raise ValueError(f"{self.key}: 'initial' only applies to select questions")
            return self

        if not self.choices:
            raise ValueError(f"{self.key}: {self.kind.value} question needs choices")
        if self.initial is None:
            return self

        positions = self.initial if isinstance(self.initial, list) else [self.initial]
        if self.kind != QuestionKind.MULTISELECT and len(positions) != 1:
            raise ValueError(f"{self.key}: single select takes one initial position")
        for pos in positions:
            if not 0 <= pos < len(self.choices):
                raise ValueError(f"{self.key}: initial position {pos} is not a choice")
        if self.kind == QuestionKind.MULTISELECT:
            self.initial = positions
        return self

    @property
    def initial_positions(self) -> list[int]:
        if self.initial is None:
            return []
        return self.initial if isinstance(self.initial, list) else [self.initial]


PR_TYPES: list[Choice] = [
    Choice(label="🍕 Feature", value="feature"),
    Choice(label="🐛 Hotfix", value="hotfix"),
    Choice(label="📝 Readme update", value="readme"),
    Choice(label="🎨 Style", value="style"),
    Choice(label="🧑‍💻 Code Refactor", value="refactor"),
    Choice(label="🔥 Performance Improvements", value="perf"),
    Choice(label="✅ Test", value="test"),
    Choice(label="🤖 Build", value="build"),
    Choice(label="🔁 CI", value="ci"),
    Choice(label="📦 Chore (Release)", value="chore"),
    Choice(label="⏩ Revert", value="revert"),
]

TESTS_CHOICES: list[Choice] = [
    Choice(label="👍 yes", value=True),
    Choice(label="🙋 no, because I need help", value=False),
    Choice(label="🙅 no, because they are not needed", value=None),
]

DOCUMENTATION_CHOICES: list[Choice] = [
    Choice(label="📜 README.md", value="readme"),
    Choice(label="📓 notion docs", value="notion"),
    Choice(label="🙅 no documentation needed", value="nodoc"),
]


# ── Answer derivation ──────────────────────────────────────


def branch_category(branch: str) -> str:
    """``feature/login`` -> ``feature``; names without a ``/`` come back whole."""
    return branch.split("/", 1)[0]


def default_choice_index(vocabulary: Sequence[Choice], key: Any) -> int | None:
    for i, choice in enumerate(vocabulary):
        if choice.value == key:
            return i
    return None


def _branch_choices(branches: Sequence[str]) -> list[Choice]:
    return [Choice(label=b, value=b) for b in branches]


# ── Pipeline ───────────────────────────────────────────────


def branch_questions(inventory: BranchInventory) -> list[Question]:
    """Draft toggle, then base and compare branch."""
    compare = _branch_choices(compare_branches(inventory))
    return [
        Question(kind=QuestionKind.TOGGLE, key="draft", message="is Draft?", default=False),
        Question(
            kind=QuestionKind.AUTOCOMPLETE,
            key="base",
            message="Choose your base branch",
            choices=_branch_choices(inventory.branches),
        ),
        Question(
            kind=QuestionKind.AUTOCOMPLETE,
            key="compare",
            message="Choose your compare branch",
            choices=compare,
            initial=default_choice_index(compare, inventory.current),
        ),
    ]


def default_detail_questions(current: str) -> list[Question]:
    """PR type, description, ticket, tests, docs and post-deployment notes."""
    return [
        Question(
            kind=QuestionKind.MULTISELECT,
            key="type",
            message="What type of PR is this? (check all applicable)",
            choices=PR_TYPES,
            initial=default_choice_index(PR_TYPES, branch_category(current)),
        ),
        Question(kind=QuestionKind.TEXT, key="description", message="Description", default=""),
        Question(kind=QuestionKind.TEXT, key="ticket", message="Related Tickets & Documents", default=""),
        Question(
            kind=QuestionKind.SELECT,
            key="tests",
            message="Added tests?",
            choices=TESTS_CHOICES,
            initial=2,
        ),
        Question(
            kind=QuestionKind.SELECT,
            key="documentation",
            message="Added to documentation?",
            choices=DOCUMENTATION_CHOICES,
            initial=2,
        ),
        Question(
            kind=QuestionKind.TEXT,
            key="postDeployment",
            message="[optional] Are there any post-deployment tasks we need to perform?",
            default="",
        ),
    ]


def check_unique_keys(questions: Sequence[Question]) -> None:
    """Raise ValueError on a key used twice or clashing with a branch question."""
    seen: set[str] = set(BRANCH_KEYS)
    for q in questions:
        if q.key in seen:
            raise ValueError(f"Duplicate question key: {q.key}")
        seen.add(q.key)


def build_questions(
    inventory: BranchInventory,
    detail_questions: Sequence[Question] | None = None,
) -> list[Question]:
    """
    Assemble the full, ordered pipeline.

    ``detail_questions`` (from the config file) replace the default detail
    questions and are appended after the branch questions.
    """
    details = list(detail_questions) if detail_questions else default_detail_questions(inventory.current)
    check_unique_keys(details)
    return branch_questions(inventory) + details

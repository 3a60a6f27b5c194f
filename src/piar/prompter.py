"""Interactive prompt collection via questionary."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import questionary

from piar.errors import PromptCancelled
from piar.questions import Question, QuestionKind

logger = logging.getLogger("piar.prompter")


def _build(q: Question) -> questionary.Question:
    # Choice values are positions: questionary treats a None value as "use the title".
    if q.kind == QuestionKind.TOGGLE:
        return questionary.confirm(q.message, default=bool(q.default))
    if q.kind == QuestionKind.TEXT:
        return questionary.text(q.message, default="" if q.default is None else str(q.default))

    initial = q.initial_positions
    if q.kind == QuestionKind.MULTISELECT:
        return questionary.checkbox(
            q.message,
            choices=[
                questionary.Choice(c.label, value=i, checked=i in initial)
                for i, c in enumerate(q.choices)
            ],
        )

    choices = [questionary.Choice(c.label, value=i) for i, c in enumerate(q.choices)]
    default = initial[0] if initial else None
    if q.kind == QuestionKind.AUTOCOMPLETE:
        return questionary.select(
            q.message,
            choices=choices,
            default=default,
            use_search_filter=True,
            use_jk_keys=False,
        )
    return questionary.select(q.message, choices=choices, default=default)


def _resolve(q: Question, raw: Any) -> Any:
    if q.kind == QuestionKind.MULTISELECT:
        return [q.choices[i].value for i in raw]
    if q.kind in (QuestionKind.SELECT, QuestionKind.AUTOCOMPLETE):
        return q.choices[raw].value
    return raw


def ask_questions(questions: Sequence[Question]) -> dict[str, Any]:
    """
    Ask every question in order and return the complete answer record.

    Raises PromptCancelled if the user interrupts any question; no partial
    record is returned.
    """
    answers: dict[str, Any] = {}
    for q in questions:
        raw = _build(q).ask()
        if raw is None:
            logger.debug("Prompt %r cancelled", q.key)
            raise PromptCancelled()
        answers[q.key] = _resolve(q, raw)
    return answers

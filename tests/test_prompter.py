from unittest.mock import patch

import pytest

from piar.branches import BranchInventory
from piar.errors import PromptCancelled
from piar.prompter import ask_questions
from piar.questions import build_questions


@pytest.fixture
def questions(remote_listing: bytes):
    raw = remote_listing.replace(b"origin/HEAD -> origin/main", b"origin/HEAD -> origin/feature/login")
    return build_questions(BranchInventory.from_output(raw))


def test_collects_full_answer_record(questions, login_answers: dict) -> None:
    with (
        patch("piar.prompter.questionary.confirm") as mock_confirm,
        patch("piar.prompter.questionary.select") as mock_select,
        patch("piar.prompter.questionary.checkbox") as mock_checkbox,
        patch("piar.prompter.questionary.text") as mock_text,
    ):
        mock_confirm.return_value.ask.return_value = True
        # base, compare, tests, documentation (choice positions)
        mock_select.return_value.ask.side_effect = [0, 1, 2, 2]
        mock_checkbox.return_value.ask.return_value = [0]
        mock_text.return_value.ask.side_effect = ["Add login", "", ""]

        answers = ask_questions(questions)

    assert answers == login_answers


def test_prompt_arguments(questions) -> None:
    with (
        patch("piar.prompter.questionary.confirm") as mock_confirm,
        patch("piar.prompter.questionary.select") as mock_select,
        patch("piar.prompter.questionary.checkbox") as mock_checkbox,
        patch("piar.prompter.questionary.text") as mock_text,
    ):
        mock_confirm.return_value.ask.return_value = False
        mock_select.return_value.ask.side_effect = [0, 1, 0, 0]
        mock_checkbox.return_value.ask.return_value = []
        mock_text.return_value.ask.return_value = ""

        ask_questions(questions)

    assert mock_confirm.call_args.kwargs["default"] is False

    base_call, compare_call, tests_call, _ = mock_select.call_args_list
    assert base_call.kwargs["use_search_filter"] is True
    assert base_call.kwargs["default"] is None
    assert [c.title for c in base_call.kwargs["choices"]] == ["main", "feature/login"]
    assert compare_call.kwargs["default"] == 1
    assert tests_call.kwargs["default"] == 2
    assert "use_search_filter" not in tests_call.kwargs

    checked = [c.checked for c in mock_checkbox.call_args.kwargs["choices"]]
    assert checked[0] is True
    assert not any(checked[1:])


def test_cancel_stops_the_pipeline(questions) -> None:
    with (
        patch("piar.prompter.questionary.confirm") as mock_confirm,
        patch("piar.prompter.questionary.select") as mock_select,
        patch("piar.prompter.questionary.checkbox") as mock_checkbox,
        patch("piar.prompter.questionary.text") as mock_text,
    ):
        mock_confirm.return_value.ask.return_value = True
        mock_select.return_value.ask.return_value = None

        with pytest.raises(PromptCancelled):
            ask_questions(questions)

    assert mock_select.call_count == 1
    mock_checkbox.assert_not_called()
    mock_text.assert_not_called()

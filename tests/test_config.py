from pathlib import Path

import pytest

from piar.config import PiarConfig, Settings, find_repo_root
from piar.errors import InvalidConfiguration, MissingConfiguration
from piar.questions import QuestionKind

CONFIG_YAML = """\
git:
  source: local
  excluded_remotes: [upstream, mirror]
ticket_url: https://jira.example.com/browse/{ticket}
renderer: hooks:Renderer
questions:
  - type: text
    name: summary
    message: Summary
  - type: select
    name: risk
    message: Risk level
    choices:
      - {title: Low, value: low}
      - {title: High, value: high}
    initial: 0
"""


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({}, "PIAR_REPO variable not found"),
        ({"PIAR_REPO": "widgets"}, "PIAR_OWNER variable not found"),
        ({"PIAR_REPO": "widgets", "PIAR_OWNER": "acme"}, "PIAR_GITHUB_TOKEN variable not found"),
    ],
)
def test_settings_require_reports_first_missing(environ: dict, message: str) -> None:
    settings = Settings.from_env(environ)

    with pytest.raises(MissingConfiguration, match=message):
        settings.require()


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {"PIAR_REPO": "widgets", "PIAR_OWNER": "acme", "PIAR_GITHUB_TOKEN": "t", "PIAR_LOG_LEVEL": "DEBUG"}
    )

    settings.require()
    assert (settings.owner, settings.repo, settings.token, settings.log_level) == ("acme", "widgets", "t", "DEBUG")


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / ".piar.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    config = PiarConfig.from_file(path)

    assert config.git.source == "local"
    assert config.git.remote == "origin"
    assert config.git.excluded_remotes == ["upstream", "mirror"]
    assert config.ticket_url == "https://jira.example.com/browse/{ticket}"
    assert config.renderer == "hooks:Renderer"
    assert [q.key for q in config.questions] == ["summary", "risk"]
    assert config.questions[1].kind == QuestionKind.SELECT
    assert config.questions[1].choices[0].value == "low"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "piar.yaml"
    path.write_text("", encoding="utf-8")

    config = PiarConfig.from_file(path)

    assert config.git.source == "remote"
    assert config.github.api_url == "https://api.github.com"
    assert config.renderer is None
    assert config.questions == []


@pytest.mark.parametrize(
    "content",
    [
        "git: [unclosed\n",
        "git:\n  source: svn\n",
        "questions:\n  - type: select\n    name: x\n    message: no choices\n",
    ],
)
def test_invalid_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / ".piar.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(InvalidConfiguration):
        PiarConfig.from_file(path)


def test_discover_prefers_repo_files(tmp_path: Path) -> None:
    repo, home = tmp_path / "repo", tmp_path / "home"
    (repo / ".piar").mkdir(parents=True)
    (home / ".piar").mkdir(parents=True)
    (repo / ".piar" / "config.yaml").write_text("ticket_url: repo/{ticket}\n", encoding="utf-8")
    (home / ".piar" / "config.yaml").write_text("ticket_url: home/{ticket}\n", encoding="utf-8")

    config = PiarConfig.discover(repo, home=home)

    assert config is not None
    assert config.ticket_url == "repo/{ticket}"


def test_discover_falls_back_to_home(tmp_path: Path) -> None:
    repo, home = tmp_path / "repo", tmp_path / "home"
    repo.mkdir()
    (home / ".piar").mkdir(parents=True)
    (home / ".piar" / "config.yaml").write_text("ticket_url: home/{ticket}\n", encoding="utf-8")

    config = PiarConfig.discover(repo, home=home)

    assert config is not None
    assert config.ticket_url == "home/{ticket}"


def test_discover_returns_none_without_file(tmp_path: Path) -> None:
    assert PiarConfig.discover(tmp_path, home=tmp_path / "home") is None


def test_find_repo_root(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)

    assert find_repo_root(nested) == tmp_path.resolve()


@pytest.mark.parametrize(
    ("content", "key"),
    [
        ("questions:\n  - {type: text, name: base, message: again}\n", "base"),
        (
            "questions:\n"
            "  - {type: text, name: summary, message: one}\n"
            "  - {type: text, name: summary, message: two}\n",
            "summary",
        ),
    ],
)
def test_question_keys_checked_at_load(tmp_path: Path, content: str, key: str) -> None:
    path = tmp_path / ".piar.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(InvalidConfiguration, match=f"Duplicate question key: {key}"):
        PiarConfig.from_file(path)

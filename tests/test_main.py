import pytest
from fastapi.testclient import TestClient

from commits_bot.dependencies import get_commit_fetcher
from commits_bot.github_api import GitHubAPIError
from commits_bot.main import create_app


@pytest.fixture
def app():
    app = create_app()
    yield app
    app.dependency_overrides.clear()


def test_health_live_returns_ok(app) -> None:
    client = TestClient(app)

    response = client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_commands_returns_help(app, make_fetcher) -> None:
    app.dependency_overrides[get_commit_fetcher] = lambda: make_fetcher()
    client = TestClient(app)

    response = client.get("/commands")

    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "!commits",
            "help": "List 3 latest commits for the bot's repository.",
            "types": ["message"],
        },
        {
            "name": "!commits summary {X}",
            "help": "Draw graph of commits over last X weeks.",
            "types": ["message"],
        },
    ]


def test_run_command_relays_recent_commits(app, make_fetcher, make_commit) -> None:
    fetcher = make_fetcher(
        [
            make_commit("2026-10-19T09:00:00Z", "Add summary command"),
            make_commit("2026-10-18T17:45:00Z", "Fix week labels"),
            make_commit("2026-10-16T08:10:00Z", "Initial commit"),
        ]
    )
    app.dependency_overrides[get_commit_fetcher] = lambda: fetcher
    client = TestClient(app)

    response = client.post("/commands", json={"message": "!commits"})

    assert response.status_code == 200
    assert response.json() == {
        "command": "!commits",
        "messages": [
            "Last 3 commits:\n"
            "1. 2026-10-19 - Add summary command\n"
            "2. 2026-10-18 - Fix week labels\n"
            "3. 2026-10-16 - Initial commit"
        ],
    }


def test_run_command_relays_weekly_summary(app, make_fetcher) -> None:
    fetcher = make_fetcher()
    app.dependency_overrides[get_commit_fetcher] = lambda: fetcher
    client = TestClient(app)

    response = client.post("/commands", json={"message": "/commits summary 2"})

    assert response.status_code == 200
    body = response.json()
    assert body["command"] == "!commits summary {X}"
    assert body["messages"][0].startswith("Commits for the last 2 weeks:\n")
    assert fetcher.calls[0]["since"].endswith("Z")


def test_run_command_returns_404_for_unknown_message(app, make_fetcher) -> None:
    app.dependency_overrides[get_commit_fetcher] = lambda: make_fetcher()
    client = TestClient(app)

    response = client.post("/commands", json={"message": "!weather"})

    assert response.status_code == 404
    assert response.json() == {"detail": "no command matches message"}


def test_run_command_returns_502_when_github_fails(app, failing_fetcher) -> None:
    app.dependency_overrides[get_commit_fetcher] = lambda: failing_fetcher
    client = TestClient(app)

    response = client.post("/commands", json={"message": "!commits"})

    assert response.status_code == 502
    assert response.json() == {"detail": "GitHub API request failed"}


def test_run_command_returns_500_without_repository(app, monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_REPO", "")
    client = TestClient(app)

    response = client.post("/commands", json={"message": "!commits"})

    assert response.status_code == 500
    assert response.json() == {"detail": "GITHUB_REPO is not set"}


def test_get_commit_fetcher_reads_repository_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_REPO", "octocat/lctv-bot")
    monkeypatch.setenv("GITHUB_USER_AGENT", "lctv-bot")

    fetcher = get_commit_fetcher()

    assert fetcher.repo == "octocat/lctv-bot"
    assert fetcher.user_agent == "lctv-bot"

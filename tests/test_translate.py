import pytest

from ghbridge.schemas import Embed
from ghbridge.services.github import (
    COLOR_ISSUE,
    COLOR_PR_CLOSED,
    COLOR_PR_OPEN,
    COLOR_PR_OTHER,
    COLOR_PUSH,
    COLOR_REVIEW,
    COLOR_REVIEW_COMMENT,
    translate,
)
from ghbridge.utils import branch_name, get_int, get_str, short_sha, truncate

REPO = {"full_name": "octo/hello", "html_url": "https://github.com/octo/hello"}
SENDER = {
    "login": "mona",
    "html_url": "https://github.com/mona",
    "avatar_url": "https://avatars.example/mona.png",
}


def _embed(event, payload) -> Embed:
    message = translate(event, payload)
    assert len(message.embeds) == 1
    return message.embeds[0]


def _commits(n):
    return [
        {"id": f"{i:040x}", "message": f"change {i}", "author": {"name": "Mona"}}
        for i in range(n)
    ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_branch_name_strips_heads_prefix():
    assert branch_name("refs/heads/main") == "main"


def test_branch_name_keeps_unprefixed_ref():
    assert branch_name("feature/x") == "feature/x"
    assert branch_name("refs/tags/v1.0") == "refs/tags/v1.0"


def test_branch_name_keeps_bare_heads_prefix():
    assert branch_name("refs/heads/") == "refs/heads/"


def test_short_sha():
    full = "0123456789abcdef0123456789abcdef01234567"
    assert short_sha(full) == "0123456"
    assert short_sha("abc") == "abc"


def test_truncate_boundary():
    assert truncate("x" * 200) == "x" * 200
    assert truncate("x" * 201) == "x" * 200 + "..."


def test_lookups_degrade_to_defaults():
    data = {"a": {"b": 3.0, "s": 5}, "flag": True}
    assert get_int(data, "a", "b") == 3
    assert get_int(data, "flag") == 0
    assert get_int(data, "missing", "x") == 0
    assert get_str(data, "a", "s") == ""
    assert get_str(data, "a", "b", "c") == ""
    assert get_int({"n": float("nan"), "i": float("inf")}, "n") == 0
    assert get_int({"i": float("inf")}, "i") == 0


# ---------------------------------------------------------------------------
# push
# ---------------------------------------------------------------------------


def test_push_single_commit():
    embed = _embed(
        "push",
        {
            "ref": "refs/heads/main",
            "compare": "https://github.com/octo/hello/compare/a...b",
            "repository": REPO,
            "pusher": {"name": "mona"},
            "sender": SENDER,
            "commits": [
                {
                    "id": "0123456789abcdef0123456789abcdef01234567",
                    "message": "Fix typo",
                    "author": {"name": "Mona Lisa"},
                }
            ],
        },
    )
    assert embed.title == "[octo/hello:main] 1 new commit"
    assert embed.url == "https://github.com/octo/hello/compare/a...b"
    assert embed.color == COLOR_PUSH
    assert embed.author.name == "mona"
    assert embed.author.url == "https://github.com/mona"
    assert embed.author.icon_url == "https://avatars.example/mona.png"
    assert embed.description == "`0123456` Fix typo - Mona Lisa"


def test_push_truncates_commit_list():
    embed = _embed(
        "push",
        {"ref": "refs/heads/dev", "repository": REPO, "commits": _commits(7)},
    )
    assert embed.title == "[octo/hello:dev] 7 new commits"
    lines = embed.description.split("\n")
    assert len(lines) == 6
    assert lines[0] == "`0000000` change 0 - Mona"
    assert lines[4] == "`0000000` change 4 - Mona"
    assert lines[5] == "... and 2 more commits"


def test_push_exactly_five_commits_has_no_overflow_line():
    embed = _embed("push", {"ref": "main", "repository": REPO, "commits": _commits(5)})
    assert "more commits" not in embed.description
    assert len(embed.description.split("\n")) == 5


def test_push_without_commits_has_no_description():
    embed = _embed("push", {"ref": "refs/heads/main", "repository": REPO, "commits": []})
    assert embed.title == "[octo/hello:main] 0 new commits"
    assert embed.description is None


def test_push_tolerates_malformed_commit_entries():
    embed = _embed("push", {"commits": ["not-a-commit", {"id": 42}]})
    assert embed.description == "``  - \n``  - "


# ---------------------------------------------------------------------------
# pull requests, issues, comments, reviews
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "action,color",
    [
        ("opened", COLOR_PR_OPEN),
        ("reopened", COLOR_PR_OPEN),
        ("closed", COLOR_PR_CLOSED),
        ("edited", COLOR_PR_OTHER),
        ("synchronize", COLOR_PR_OTHER),
    ],
)
def test_pull_request_color(action, color):
    embed = _embed("pull_request", {"action": action, "pull_request": {"number": 1}})
    assert embed.color == color


def test_pull_request_embed():
    embed = _embed(
        "pull_request",
        {
            "action": "opened",
            "repository": REPO,
            "pull_request": {
                "number": 42,
                "title": "Add feature",
                "html_url": "https://github.com/octo/hello/pull/42",
                "user": SENDER,
            },
        },
    )
    assert embed.title == "[octo/hello] Pull request #42 opened: Add feature"
    assert embed.url == "https://github.com/octo/hello/pull/42"
    assert embed.author.name == "mona"
    assert embed.description is None


def test_issue_embed():
    embed = _embed(
        "issues",
        {
            "action": "closed",
            "repository": REPO,
            "issue": {
                "number": 7,
                "title": "Crash on start",
                "html_url": "https://github.com/octo/hello/issues/7",
                "user": SENDER,
            },
        },
    )
    assert embed.title == "[octo/hello] Issue #7 closed: Crash on start"
    assert embed.url == "https://github.com/octo/hello/issues/7"
    assert embed.color == COLOR_ISSUE


def test_issue_comment_truncates_body():
    body = "y" * 250
    embed = _embed(
        "issue_comment",
        {
            "repository": REPO,
            "issue": {"number": 7, "title": "Crash on start"},
            "comment": {
                "html_url": "https://github.com/octo/hello/issues/7#issuecomment-1",
                "body": body,
                "user": SENDER,
            },
        },
    )
    assert embed.title == "[octo/hello] New comment on issue #7: Crash on start"
    assert embed.url == "https://github.com/octo/hello/issues/7#issuecomment-1"
    assert embed.description == "y" * 200 + "..."
    assert embed.author.icon_url == SENDER["avatar_url"]


def test_review_comment_embed():
    embed = _embed(
        "pull_request_review_comment",
        {
            "repository": REPO,
            "pull_request": {"number": 3, "title": "Refactor"},
            "comment": {"html_url": "https://c", "body": "nit", "user": SENDER},
        },
    )
    assert embed.title == "[octo/hello] New comment on pull request #3: Refactor"
    assert embed.color == COLOR_REVIEW_COMMENT
    assert embed.description == "nit"


def test_review_embed_with_and_without_body():
    payload = {
        "repository": REPO,
        "pull_request": {"number": 3, "title": "Refactor"},
        "review": {"state": "approved", "html_url": "https://r", "user": SENDER, "body": ""},
    }
    embed = _embed("pull_request_review", payload)
    assert embed.title == "[octo/hello] Pull request review approved on #3: Refactor"
    assert embed.url == "https://r"
    assert embed.color == COLOR_REVIEW
    assert embed.description is None

    payload["review"]["body"] = "LGTM"
    assert _embed("pull_request_review", payload).description == "LGTM"


# ---------------------------------------------------------------------------
# sender-authored events and fallback
# ---------------------------------------------------------------------------


def test_star_created_and_removed():
    created = _embed("star", {"action": "created", "repository": REPO, "sender": SENDER})
    assert created.title == "[octo/hello] New star"
    assert created.url == REPO["html_url"]
    assert created.color is None
    assert created.author.name == "mona"

    removed = _embed("star", {"action": "deleted", "repository": REPO, "sender": SENDER})
    assert removed.title == "[octo/hello] Star removed"


def test_fork_embed():
    embed = _embed(
        "fork",
        {"repository": REPO, "sender": SENDER, "forkee": {"html_url": "https://github.com/mona/hello"}},
    )
    assert embed.title == "[octo/hello] Forked"
    assert embed.url == "https://github.com/mona/hello"
    assert embed.description == "Fork: https://github.com/mona/hello"


@pytest.mark.parametrize("event,verb", [("create", "Created"), ("delete", "Deleted")])
def test_ref_events(event, verb):
    embed = _embed(
        event,
        {"ref_type": "branch", "ref": "topic", "repository": REPO, "sender": SENDER},
    )
    assert embed.title == f"[octo/hello] {verb} branch: topic"
    assert embed.url == REPO["html_url"]


def test_unknown_event_falls_back():
    embed = _embed("workflow_run", {"repository": REPO, "sender": SENDER})
    assert embed.title == "[octo/hello] workflow_run event"
    assert embed.url == REPO["html_url"]
    assert embed.author.name == "mona"
    assert embed.color is None


# ---------------------------------------------------------------------------
# never raises
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "event",
    [
        "push",
        "pull_request",
        "issues",
        "issue_comment",
        "pull_request_review_comment",
        "pull_request_review",
        "star",
        "fork",
        "create",
        "delete",
        "gollum",
        "",
    ],
)
@pytest.mark.parametrize(
    "payload",
    [
        {},
        None,
        {"repository": None, "pull_request": "x", "issue": [], "comment": 5, "review": None},
        {"commits": None, "forkee": "oops", "sender": []},
    ],
)
def test_translate_never_raises(event, payload):
    embed = _embed(event, payload)
    assert isinstance(embed.title, str)
    assert isinstance(embed.url, str)


def test_missing_repository_leaves_empty_segment():
    assert _embed("issues", {"action": "opened"}).title == "[] Issue #0 opened: "


def test_message_payload_shape():
    message = translate("star", {"action": "created", "repository": REPO, "sender": SENDER})
    assert message.to_payload() == {
        "embeds": [
            {
                "title": "[octo/hello] New star",
                "url": REPO["html_url"],
                "author": {
                    "name": "mona",
                    "url": "https://github.com/mona",
                    "icon_url": "https://avatars.example/mona.png",
                },
            }
        ]
    }

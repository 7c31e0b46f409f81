"""Discord embeds for GitHub webhook events."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ghbridge.schemas import DiscordMessage, Embed, EmbedAuthor, EventKind
from ghbridge.utils import (
    branch_name,
    ensure_mapping,
    get_int,
    get_str,
    short_sha,
    truncate,
)

MAX_COMMITS = 5  # Show up to five commits in push descriptions.

COLOR_PUSH = 0x7289DA
COLOR_PR_OPEN = 0x28A745
COLOR_PR_CLOSED = 0x6E7681
COLOR_PR_OTHER = 0xFF69B4
COLOR_ISSUE = 0xDC143C
COLOR_ISSUE_COMMENT = 0xFF69B4
COLOR_REVIEW_COMMENT = 0xFFFFFF
COLOR_REVIEW = 0x90EE90

GITHUB_BASE_URL = "https://github.com"

Handler = Callable[[Mapping[str, Any], str], Embed]


def _author(user: Any) -> EmbedAuthor:
    return EmbedAuthor(
        name=get_str(user, "login"),
        url=get_str(user, "html_url"),
        icon_url=get_str(user, "avatar_url"),
    )


def _repo(payload: Mapping[str, Any]) -> str:
    return get_str(payload, "repository", "full_name")


def _repo_url(payload: Mapping[str, Any]) -> str:
    return get_str(payload, "repository", "html_url")


def _commit_line(commit: Any) -> str:
    sha = short_sha(get_str(commit, "id"))
    message = get_str(commit, "message")
    author = get_str(commit, "author", "name")
    return f"`{sha}` {message} - {author}"


def _embed_push(payload: Mapping[str, Any], _event: str) -> Embed:
    repo = _repo(payload)
    branch = branch_name(get_str(payload, "ref"))
    pusher = get_str(payload, "pusher", "name")

    commits = payload.get("commits")
    commit_text = ""
    if isinstance(commits, list):
        count = len(commits)
        commit_text = "1 new commit" if count == 1 else f"{count} new commits"

    embed = Embed(
        title=f"[{repo}:{branch}] {commit_text}",
        url=get_str(payload, "compare"),
        color=COLOR_PUSH,
        author=EmbedAuthor(
            name=pusher,
            url=f"{GITHUB_BASE_URL}/{pusher}",
            icon_url=get_str(payload, "sender", "avatar_url"),
        ),
    )
    if isinstance(commits, list) and commits:
        lines = [_commit_line(commit) for commit in commits[:MAX_COMMITS]]
        overflow = len(commits) - MAX_COMMITS
        if overflow > 0:
            lines.append(f"... and {overflow} more commits")
        embed.description = "\n".join(lines)
    return embed


def _pull_request_color(action: str) -> int:
    if action in ("opened", "reopened"):
        return COLOR_PR_OPEN
    if action == "closed":
        return COLOR_PR_CLOSED
    return COLOR_PR_OTHER


def _embed_pull_request(payload: Mapping[str, Any], _event: str) -> Embed:
    action = get_str(payload, "action")
    pr = ensure_mapping(payload.get("pull_request"))
    number = get_int(pr, "number")
    title = get_str(pr, "title")
    return Embed(
        title=f"[{_repo(payload)}] Pull request #{number} {action}: {title}",
        url=get_str(pr, "html_url"),
        color=_pull_request_color(action),
        author=_author(pr.get("user")),
    )


def _embed_issues(payload: Mapping[str, Any], _event: str) -> Embed:
    action = get_str(payload, "action")
    issue = ensure_mapping(payload.get("issue"))
    number = get_int(issue, "number")
    title = get_str(issue, "title")
    return Embed(
        title=f"[{_repo(payload)}] Issue #{number} {action}: {title}",
        url=get_str(issue, "html_url"),
        color=COLOR_ISSUE,
        author=_author(issue.get("user")),
    )


def _embed_issue_comment(payload: Mapping[str, Any], _event: str) -> Embed:
    issue = ensure_mapping(payload.get("issue"))
    comment = ensure_mapping(payload.get("comment"))
    number = get_int(issue, "number")
    title = get_str(issue, "title")
    return Embed(
        title=f"[{_repo(payload)}] New comment on issue #{number}: {title}",
        url=get_str(comment, "html_url"),
        color=COLOR_ISSUE_COMMENT,
        author=_author(comment.get("user")),
        description=truncate(get_str(comment, "body")),
    )


def _embed_pull_request_review_comment(payload: Mapping[str, Any], _event: str) -> Embed:
    pr = ensure_mapping(payload.get("pull_request"))
    comment = ensure_mapping(payload.get("comment"))
    number = get_int(pr, "number")
    title = get_str(pr, "title")
    return Embed(
        title=f"[{_repo(payload)}] New comment on pull request #{number}: {title}",
        url=get_str(comment, "html_url"),
        color=COLOR_REVIEW_COMMENT,
        author=_author(comment.get("user")),
        description=truncate(get_str(comment, "body")),
    )


def _embed_pull_request_review(payload: Mapping[str, Any], _event: str) -> Embed:
    pr = ensure_mapping(payload.get("pull_request"))
    review = ensure_mapping(payload.get("review"))
    number = get_int(pr, "number")
    title = get_str(pr, "title")
    state = get_str(review, "state")
    body = get_str(review, "body")
    return Embed(
        title=f"[{_repo(payload)}] Pull request review {state} on #{number}: {title}",
        url=get_str(review, "html_url"),
        color=COLOR_REVIEW,
        author=_author(review.get("user")),
        description=truncate(body) if body else None,
    )


def _embed_star(payload: Mapping[str, Any], _event: str) -> Embed:
    repo = _repo(payload)
    if get_str(payload, "action") == "created":
        title = f"[{repo}] New star"
    else:
        title = f"[{repo}] Star removed"
    return Embed(title=title, url=_repo_url(payload), author=_author(payload.get("sender")))


def _embed_fork(payload: Mapping[str, Any], _event: str) -> Embed:
    fork_url = get_str(payload, "forkee", "html_url")
    return Embed(
        title=f"[{_repo(payload)}] Forked",
        url=fork_url,
        author=_author(payload.get("sender")),
        description=f"Fork: {fork_url}",
    )


def _embed_ref_change(verb: str) -> Handler:
    def handler(payload: Mapping[str, Any], _event: str) -> Embed:
        ref_type = get_str(payload, "ref_type")
        ref = get_str(payload, "ref")
        return Embed(
            title=f"[{_repo(payload)}] {verb} {ref_type}: {ref}",
            url=_repo_url(payload),
            author=_author(payload.get("sender")),
        )

    return handler


def _generic_fallback(payload: Mapping[str, Any], event: str) -> Embed:
    return Embed(
        title=f"[{_repo(payload)}] {event} event",
        url=_repo_url(payload),
        author=_author(payload.get("sender")),
    )


HANDLERS: dict[EventKind, Handler] = {
    EventKind.PUSH: _embed_push,
    EventKind.PULL_REQUEST: _embed_pull_request,
    EventKind.ISSUES: _embed_issues,
    EventKind.ISSUE_COMMENT: _embed_issue_comment,
    EventKind.PULL_REQUEST_REVIEW_COMMENT: _embed_pull_request_review_comment,
    EventKind.PULL_REQUEST_REVIEW: _embed_pull_request_review,
    EventKind.STAR: _embed_star,
    EventKind.FORK: _embed_fork,
    EventKind.CREATE: _embed_ref_change("Created"),
    EventKind.DELETE: _embed_ref_change("Deleted"),
}


def translate(event: str, payload: Mapping[str, Any] | None) -> DiscordMessage:
    """
    Build the Discord message for one GitHub delivery.

    Missing or mistyped payload fields degrade to empty strings and zeros;
    events without a dedicated rule get a generic ``{kind} event`` embed.
    """
    payload = ensure_mapping(payload)
    kind = EventKind.parse(event)
    handler = HANDLERS.get(kind) if kind is not None else None
    if handler is None:
        embed = _generic_fallback(payload, event or "")
    else:
        embed = handler(payload, event)
    return DiscordMessage(embeds=[embed])

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Post the rendered summary as a comment on the pull request under review.

This is the only part of perfgate that talks to the network, and it is kept
apart from the evaluator: evaluation produces text, this module ships it.

The pull request is discovered from CI environment variables:
  - CIRCLE_PULL_REQUEST: full PR URL, e.g. https://github.com/acme/web/pull/42
  - PERFGATE_PR_NUMBER: explicit number, combined with the repository from
    config or CIRCLE_PROJECT_USERNAME / CIRCLE_PROJECT_REPONAME
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

import httpx

from perfgate.logging.logger import get_logger

logger = get_logger(__name__)

_PR_URL_RE = re.compile(r"/(?P<owner>[^/]+)/(?P<repo>[^/]+)/pull/(?P<number>\d+)/?$")


class NotifyError(Exception):
    """Raised when the comment cannot be posted."""


@dataclass(frozen=True)
class PullRequestRef:
    """Enough to address a pull request through the REST API."""

    owner: str
    repo: str
    number: int

    @property
    def comments_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/issues/{self.number}/comments"


def resolve_pull_request(
    env: Mapping[str, str],
    repository: Optional[str] = None,
) -> Optional[PullRequestRef]:
    """
    Figure out which pull request this build belongs to.

    Returns None for builds with no pull request (a push to main, say).
    """
    pr_url = env.get("CIRCLE_PULL_REQUEST", "")
    match = _PR_URL_RE.search(pr_url)
    if match:
        return PullRequestRef(
            owner=match.group("owner"),
            repo=match.group("repo"),
            number=int(match.group("number")),
        )

    number = env.get("PERFGATE_PR_NUMBER", "").strip()
    if not number.isdigit():
        return None

    if repository is None:
        owner = env.get("CIRCLE_PROJECT_USERNAME")
        repo = env.get("CIRCLE_PROJECT_REPONAME")
        if not owner or not repo:
            return None
    else:
        owner, repo = repository.split("/", 1)

    return PullRequestRef(owner=owner, repo=repo, number=int(number))


def post_comment(
    ref: PullRequestRef,
    body: str,
    token: str,
    api_url: str = "https://api.github.com",
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Create an issue comment on the pull request.

    Args:
        ref: The pull request to comment on.
        body: Markdown comment body.
        token: API token with permission to comment.
        api_url: REST API root, overridable for GitHub Enterprise.
        timeout: Request timeout in seconds.
        client: Optional pre-built client (tests pass one with a mock transport).

    Returns:
        The html_url of the created comment, or "" if the API didn't return one.

    Raises:
        NotifyError: Transport failure or a non-2xx response.
    """
    if not token:
        raise NotifyError("No API token available for posting the comment")

    url = f"{api_url.rstrip('/')}{ref.comments_path}"
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        response = http.post(url, json={"body": body}, headers=headers)
    except httpx.HTTPError as err:
        raise NotifyError(f"Failed to reach {url}: {err}") from err
    finally:
        if owns_client:
            http.close()

    if response.status_code >= 300:
        raise NotifyError(
            f"Comment API returned {response.status_code} for {ref.owner}/{ref.repo}#{ref.number}: "
            f"{response.text[:200]}"
        )

    try:
        payload = response.json()
    except ValueError:
        payload = None
    html_url = str(payload.get("html_url", "")) if isinstance(payload, dict) else ""

    logger.info(
        "Posted pull request comment",
        extra={"repository": f"{ref.owner}/{ref.repo}", "number": ref.number, "url": html_url},
    )
    return html_url

"""
Merge Agent
===========
Squash-merges the pull request once CI is green and judges the outcome.
A merge call that succeeds at the HTTP level but reports ``merged: false``
(branch protection, stale head, ...) is a MergeDeclinedError, not a
transport failure.
"""
import logging

from app.core.errors import MergeDeclinedError
from app.models.github import MergeResponse, PullRequest
from app.services.github_client import GitHubClient

logger = logging.getLogger(__name__)


def finalize_merge(merge_outcome: bool) -> None:
    if not merge_outcome:
        raise MergeDeclinedError("merge API returned false")


def merge_pull_request(client: GitHubClient, pr: PullRequest, commit_prefix: str) -> MergeResponse:
    """Squash-merge ``pr`` using its title as the commit title."""
    commit_message = f"{commit_prefix} Squash merge by automation"
    response = client.merge_pull_request(pr.number, pr.title, commit_message)
    if not response.merged and response.message:
        logger.error("Merge of #%d declined: %s", pr.number, response.message)
    finalize_merge(response.merged)
    logger.info("Merged pull request #%d as %s", pr.number, response.sha)
    return response

"""
GitHub Client
=============
Thin synchronous wrapper over the three GitHub REST calls the run needs:
open a pull request, read the combined status of a commit, squash-merge.

No retries: any non-2xx response, transport failure or undecodable body
raises GatewayError and aborts the run.
"""
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.core.constants import (
    GITHUB_ACCEPT,
    GITHUB_API_BASE_URL,
    GITHUB_API_VERSION,
    MERGE_METHOD,
)
from app.core.errors import GatewayError
from app.models.github import (
    CombinedStatus,
    CreatePullRequest,
    MergeRequest,
    MergeResponse,
    PullRequest,
)

logger = logging.getLogger(__name__)

_Model = TypeVar("_Model", bound=BaseModel)

_REQUEST_TIMEOUT = 30.0


class GitHubClient:
    """
    Pull-request gateway bound to one repository.

    Paths are relative to the ``httpx.Client`` base URL. Pass ``http_client``
    (built with ``base_url``) to reuse or mock the transport; otherwise the
    client owns its own ``httpx.Client`` and closes it in ``close()``.
    """

    def __init__(
        self,
        token: str,
        repo_owner: str,
        repo_name: str,
        base_url: str = GITHUB_API_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.repo_owner = repo_owner
        self.repo_name = repo_name
        self.headers = {
            "Accept": GITHUB_ACCEPT,
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": "ci-auto-merge",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=_REQUEST_TIMEOUT)

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.repo_owner}/{self.repo_name}"

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        model: Type[_Model],
        payload: Optional[Dict[str, Any]] = None,
    ) -> _Model:
        try:
            response = self._client.request(method, path, headers=self.headers, json=payload)
        except httpx.HTTPError as e:
            raise GatewayError(f"failed to execute request: {e}") from e

        if not 200 <= response.status_code < 300:
            body = response.text
            raise GatewayError(
                f"GitHub API returned status {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise GatewayError(f"failed to decode response: {e}", status_code=response.status_code) from e

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def create_pull_request(self, title: str, head: str, base: str, body: str) -> PullRequest:
        """Open a pull request from ``head`` into ``base``."""
        request = CreatePullRequest(title=title, head=head, base=base, body=body)
        pr = self._request("POST", f"{self._repo_path}/pulls", PullRequest, request.model_dump())
        logger.info("Opened pull request #%d: %s", pr.number, pr.title)
        return pr

    def get_combined_status(self, sha: str) -> CombinedStatus:
        return self._request("GET", f"{self._repo_path}/commits/{sha}/status", CombinedStatus)

    def merge_pull_request(self, pr_number: int, commit_title: str, commit_message: str) -> MergeResponse:
        """
        Squash-merge a pull request.

        Returns the raw MergeResponse; whether ``merged`` is false is for
        the caller to judge.
        """
        request = MergeRequest(
            commit_title=commit_title,
            commit_message=commit_message,
            merge_method=MERGE_METHOD,
        )
        return self._request(
            "PUT",
            f"{self._repo_path}/pulls/{pr_number}/merge",
            MergeResponse,
            request.model_dump(exclude_none=True),
        )

"""
GitHub Models
=============
Pydantic records for the GitHub REST payloads exchanged by the
pull-request gateway. Only ``PullRequest.number`` / ``title``,
``CombinedStatus.state`` and ``MergeResponse.merged`` drive decisions;
everything else is carried through for logging and the run summary.

All models ignore unknown fields and tolerate missing ones, since GitHub
adds fields over time and omits some depending on token scope.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _GitHubModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class User(_GitHubModel):
    login: str = ""
    id: int = 0
    node_id: str = ""
    avatar_url: str = ""
    gravatar_id: str = ""
    url: str = ""
    html_url: str = ""
    followers_url: str = ""
    following_url: str = ""
    gists_url: str = ""
    starred_url: str = ""
    subscriptions_url: str = ""
    organizations_url: str = ""
    repos_url: str = ""
    events_url: str = ""
    received_events_url: str = ""
    type: str = ""
    site_admin: bool = False


class Label(_GitHubModel):
    id: int = 0
    node_id: str = ""
    url: str = ""
    name: str = ""
    description: Optional[str] = None
    color: str = ""
    default: bool = False


class Milestone(_GitHubModel):
    url: str = ""
    html_url: str = ""
    labels_url: str = ""
    id: int = 0
    node_id: str = ""
    number: int = 0
    state: str = ""
    title: str = ""
    description: Optional[str] = None
    creator: Optional[User] = None
    open_issues: int = 0
    closed_issues: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    due_on: Optional[datetime] = None


class Team(_GitHubModel):
    id: int = 0
    node_id: str = ""
    url: str = ""
    html_url: str = ""
    name: str = ""
    slug: str = ""
    description: Optional[str] = None
    privacy: str = ""
    permission: str = ""
    notification_setting: str = ""
    members_url: str = ""
    repositories_url: str = ""
    parent: Optional["Team"] = None


class Permission(_GitHubModel):
    admin: bool = False
    push: bool = False
    pull: bool = False


class License(_GitHubModel):
    key: str = ""
    name: str = ""
    url: Optional[str] = None
    spdx_id: Optional[str] = None
    node_id: str = ""
    html_url: Optional[str] = None


class Repository(_GitHubModel):
    id: int = 0
    node_id: str = ""
    name: str = ""
    full_name: str = ""
    owner: Optional[User] = None
    private: bool = False
    html_url: str = ""
    description: Optional[str] = None
    fork: bool = False
    url: str = ""
    clone_url: str = ""
    git_url: str = ""
    ssh_url: str = ""
    homepage: Optional[str] = None
    language: Optional[str] = None
    forks_count: int = 0
    stargazers_count: int = 0
    watchers_count: int = 0
    size: int = 0
    default_branch: str = ""
    open_issues_count: int = 0
    is_template: bool = False
    topics: List[str] = Field(default_factory=list)
    has_issues: bool = False
    has_projects: bool = False
    has_wiki: bool = False
    has_pages: bool = False
    has_downloads: bool = False
    archived: bool = False
    disabled: bool = False
    visibility: str = ""
    pushed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    permissions: Optional[Permission] = None
    allow_rebase_merge: bool = False
    allow_squash_merge: bool = False
    allow_auto_merge: bool = False
    allow_merge_commit: bool = False
    delete_branch_on_merge: bool = False
    license: Optional[License] = None
    forks: int = 0
    open_issues: int = 0
    watchers: int = 0


class Branch(_GitHubModel):
    label: str = ""
    ref: str = ""
    sha: str = ""
    user: Optional[User] = None
    repo: Optional[Repository] = None


class Link(_GitHubModel):
    href: str = ""


class Links(_GitHubModel):
    self_link: Optional[Link] = Field(default=None, alias="self")
    html: Optional[Link] = None
    issue: Optional[Link] = None
    comments: Optional[Link] = None
    review_comments: Optional[Link] = None
    review_comment: Optional[Link] = None
    commits: Optional[Link] = None
    statuses: Optional[Link] = None


class AutoMerge(_GitHubModel):
    enabled_by: Optional[User] = None
    merge_method: str = ""
    commit_title: str = ""
    commit_message: str = ""


class PullRequest(_GitHubModel):
    url: str = ""
    id: int = 0
    node_id: str = ""
    html_url: str = ""
    diff_url: str = ""
    patch_url: str = ""
    issue_url: str = ""
    commits_url: str = ""
    statuses_url: str = ""
    number: int
    state: str = ""
    locked: bool = False
    title: str = ""
    user: Optional[User] = None
    body: Optional[str] = None
    labels: List[Label] = Field(default_factory=list)
    milestone: Optional[Milestone] = None
    active_lock_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    merge_commit_sha: Optional[str] = None
    assignee: Optional[User] = None
    assignees: List[User] = Field(default_factory=list)
    requested_reviewers: List[User] = Field(default_factory=list)
    requested_teams: List[Team] = Field(default_factory=list)
    head: Optional[Branch] = None
    base: Optional[Branch] = None
    links: Optional[Links] = Field(default=None, alias="_links")
    author_association: str = ""
    auto_merge: Optional[AutoMerge] = None
    draft: bool = False


class Status(_GitHubModel):
    """One check reported against a commit."""
    state: str = ""
    target_url: Optional[str] = None
    description: Optional[str] = None
    context: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RepositoryMeta(_GitHubModel):
    id: int = 0
    name: str = ""
    owner: Optional[User] = None


class CombinedStatus(_GitHubModel):
    """
    Aggregate CI state for one commit: pending / success / failure / error.
    Each poll yields an independent snapshot; only ``state`` is compared.
    """
    state: str = ""
    statuses: List[Status] = Field(default_factory=list)
    sha: str = ""
    total_count: int = 0
    commit_url: str = ""
    url: str = ""
    repository: Optional[RepositoryMeta] = None


class CreatePullRequest(_GitHubModel):
    title: str
    head: str
    base: str
    body: str = ""


class MergeRequest(_GitHubModel):
    commit_title: Optional[str] = None
    commit_message: Optional[str] = None
    sha: Optional[str] = None
    merge_method: Optional[str] = None


class MergeResponse(_GitHubModel):
    sha: str = ""
    merged: bool = False
    message: str = ""

"""
Run State
TypedDict summarising one auto-merge invocation, returned by the
orchestrator and serialised by the results writer.
"""
from typing import List, Optional, TypedDict


class RunState(TypedDict):
    # Repo info
    repository: str             # owner/name
    base_branch: str
    branch_name: str

    # Progress
    status: str                 # skipped, no_changes, merged, failed
    last_commit_message: str
    commands_run: List[str]
    pr_number: Optional[int]
    pr_url: str
    head_sha: str

    # CI wait
    ci_state: str               # success, failure, error, timeout, "" if never polled
    ci_polls: List[dict]

    # Merge
    merge_sha: str

    # Timing
    start_time: float
    duration_seconds: float

    error: str

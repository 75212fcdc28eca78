"""
Configuration
=============
Converts the process environment into a single immutable AutoMergeConfig.
An optional .env file is merged with python-dotenv (real variables win).

Environment Variables:
    INPUT_GITHUB_ACCESS_TOKEN / GITHUB_ACCESS_TOKEN - required, first non-blank wins
    INPUT_COMMANDS          - required, newline and/or comma separated
    INPUT_COMMIT_PREFIX     - commit message prefix (default: [Auto Merge])
    GITHUB_REPOSITORY       - required, owner/name
    GITHUB_REF_NAME         - base branch (default: main)
    GITHUB_ACTOR            - git identity (default: github-actions)
    PREFIXES_TO_IGNORE      - extra ignore prefixes, comma separated
    PREFIXES_TO_RUN_ON      - required commit prefixes, comma separated
    CONTAINS_TO_RUN_ON      - required commit substrings, comma separated
    INPUT_WAIT_SECONDS      - delay before the first CI poll (default: 30)
    INPUT_CI_TIMEOUT_SECONDS  - CI wait deadline (default: 900)
    INPUT_CI_INTERVAL_SECONDS - delay between CI polls (default: 10)
    INPUT_PUSH_REMOTE       - override push URL
    INPUT_RESULTS_PATH      - optional JSON run summary path
    INPUT_LOG_LEVEL         - logging level name (default: INFO)

Core logic never reads os.environ; the loaded config is passed by parameter.
"""
import logging
import os
from typing import List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from app.core.constants import (
    COMMIT_PREFIX,
    DEFAULT_BASE_BRANCH,
    DEFAULT_CI_INTERVAL_SECONDS,
    DEFAULT_CI_TIMEOUT_SECONDS,
    DEFAULT_GIT_ACTOR,
    DEFAULT_IGNORE_PREFIXES,
    DEFAULT_WAIT_SECONDS,
)
from app.core.errors import ConfigurationError
from app.models.run_policy import RunPolicy


class AutoMergeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    access_token: str
    commands: Tuple[str, ...]
    repo_owner: str
    repo_name: str
    commit_prefix: str = COMMIT_PREFIX
    base_branch: str = DEFAULT_BASE_BRANCH
    git_actor: str = DEFAULT_GIT_ACTOR
    policy: RunPolicy = RunPolicy()
    wait_seconds: float = DEFAULT_WAIT_SECONDS
    ci_timeout_seconds: float = DEFAULT_CI_TIMEOUT_SECONDS
    ci_interval_seconds: float = DEFAULT_CI_INTERVAL_SECONDS
    push_remote: str = ""
    results_path: str = ""
    log_level: str = "INFO"

    @property
    def push_url(self) -> str:
        if self.push_remote:
            return self.push_remote
        return (
            f"https://x-access-token:{self.access_token}"
            f"@github.com/{self.repo_owner}/{self.repo_name}.git"
        )


def split_commands(raw: str) -> List[str]:
    """Split on newlines, then commas; drop blanks."""
    commands = []
    for line in (raw or "").split("\n"):
        for segment in line.split(","):
            command = segment.strip()
            if command:
                commands.append(command)
    return commands


def parse_list(raw: Optional[str]) -> List[str]:
    if not raw or not raw.strip():
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def first_non_empty(*values: Optional[str]) -> str:
    for value in values:
        if value and value.strip():
            return value
    return ""


def _seconds(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from e
    # Non-positive values mean "use the default"
    return value if value > 0 else default


def load_config(environ: Optional[Mapping[str, str]] = None) -> AutoMergeConfig:
    """
    Build the run configuration.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Source of variables. Defaults to os.environ after loading .env.

    Raises
    ------
    ConfigurationError
        When a required value is missing or malformed.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ
    env = environ

    token = first_non_empty(env.get("INPUT_GITHUB_ACCESS_TOKEN"), env.get("GITHUB_ACCESS_TOKEN")).strip()
    if not token:
        raise ConfigurationError("github access token is required")

    commands = split_commands(env.get("INPUT_COMMANDS", ""))
    if not commands:
        raise ConfigurationError("at least one command is required")

    repo = env.get("GITHUB_REPOSITORY", "")
    parts = repo.split("/")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise ConfigurationError(f"invalid GITHUB_REPOSITORY: {repo}")

    commit_prefix = (env.get("INPUT_COMMIT_PREFIX") or "").strip() or COMMIT_PREFIX
    base_branch = (env.get("GITHUB_REF_NAME") or "").strip() or DEFAULT_BASE_BRANCH
    git_actor = (env.get("GITHUB_ACTOR") or "").strip() or DEFAULT_GIT_ACTOR

    ignore = [*DEFAULT_IGNORE_PREFIXES, commit_prefix, *parse_list(env.get("PREFIXES_TO_IGNORE"))]
    policy = RunPolicy(
        ignore_prefixes=tuple(ignore),
        require_prefixes=tuple(parse_list(env.get("PREFIXES_TO_RUN_ON"))),
        require_substrings=tuple(parse_list(env.get("CONTAINS_TO_RUN_ON"))),
    )

    log_level = (env.get("INPUT_LOG_LEVEL") or "").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"unknown INPUT_LOG_LEVEL: {log_level}")

    return AutoMergeConfig(
        access_token=token,
        commands=tuple(commands),
        repo_owner=parts[0].strip(),
        repo_name=parts[1].strip(),
        commit_prefix=commit_prefix,
        base_branch=base_branch,
        git_actor=git_actor,
        policy=policy,
        wait_seconds=_seconds(env, "INPUT_WAIT_SECONDS", DEFAULT_WAIT_SECONDS),
        ci_timeout_seconds=_seconds(env, "INPUT_CI_TIMEOUT_SECONDS", DEFAULT_CI_TIMEOUT_SECONDS),
        ci_interval_seconds=_seconds(env, "INPUT_CI_INTERVAL_SECONDS", DEFAULT_CI_INTERVAL_SECONDS),
        push_remote=(env.get("INPUT_PUSH_REMOTE") or "").strip(),
        results_path=(env.get("INPUT_RESULTS_PATH") or "").strip(),
        log_level=log_level,
    )

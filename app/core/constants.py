"""
Constants
Centralised storage for defaults, self-trigger guards and GitHub API rules.
"""
COMMIT_PREFIX = "[Auto Merge]"
DEFAULT_IGNORE_PREFIXES = ["Auto Merge", "[Auto Merge]:"]
DEFAULT_BASE_BRANCH = "main"
DEFAULT_GIT_ACTOR = "github-actions"
BRANCH_PREFIX = "auto-merge-"

# Timing (seconds)
DEFAULT_WAIT_SECONDS = 30
DEFAULT_CI_TIMEOUT_SECONDS = 15 * 60
DEFAULT_CI_INTERVAL_SECONDS = 10

# GitHub REST API
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_ACCEPT = "application/vnd.github+json"
MERGE_METHOD = "squash"

# Combined status vocabulary
CI_SUCCESS = "success"
CI_FAILURE_STATES = ("failure", "error")

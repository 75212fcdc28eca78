"""
Git Agent
=========
Local git plumbing for the run: read the last commit, detect pending
changes, and publish them on a fresh branch.
Every failure raises SourceControlError; nothing is retried.
"""
import logging
import subprocess
import time
from typing import List, Optional

from app.core.constants import BRANCH_PREFIX
from app.core.errors import SourceControlError

logger = logging.getLogger(__name__)


class GitAgent:
    """
    Agent responsible for reading and writing the workspace repository.
    """

    def __init__(self, workspace_path: str = ".") -> None:
        self.workspace_path = workspace_path
        self.branch_name = ""

    def _git(self, args: List[str], capture: bool = True, redact: Optional[str] = None) -> str:
        """
        Run one git command in the workspace.

        ``redact`` is replaced in error messages (push URLs carry the token).
        """
        shown = " ".join(args)
        if redact:
            shown = shown.replace(redact, "***")
        try:
            proc = subprocess.run(
                ["git", *args],
                cwd=self.workspace_path,
                check=True,
                capture_output=capture,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            if redact:
                stderr = stderr.replace(redact, "***")
            raise SourceControlError(f"git {shown} failed: {stderr or f'exit {e.returncode}'}") from e
        except OSError as e:
            raise SourceControlError(f"git {shown} could not start: {e}") from e
        return (proc.stdout or "").strip()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def latest_commit_message(self) -> str:
        """Subject line of HEAD."""
        return self._git(["log", "-1", "--pretty=%s"])

    def has_pending_changes(self) -> bool:
        return self._git(["status", "--porcelain"]) != ""

    def head_commit_sha(self) -> str:
        return self._git(["rev-parse", "HEAD"])

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    @staticmethod
    def generate_branch_name(now: Optional[float] = None) -> str:
        """auto-merge-<unix seconds>"""
        stamp = int(now if now is not None else time.time())
        return f"{BRANCH_PREFIX}{stamp}"

    def create_branch(self, name: str) -> None:
        self._git(["checkout", "-b", name], capture=False)
        self.branch_name = name
        logger.info("Checked out branch: %s", name)

    def configure_identity(self, name: str, email: str) -> None:
        self._git(["config", "user.name", name])
        self._git(["config", "user.email", email])

    def stage_all(self) -> None:
        self._git(["add", "--all"])

    def commit(self, message: str) -> None:
        self._git(["commit", "-m", message], capture=False)
        logger.info("Committed: %s", message)

    def push(self, remote_url: str, branch: str, secret: Optional[str] = None) -> None:
        self._git(["push", remote_url, branch], capture=False, redact=secret)
        logger.info("Pushed branch: %s", branch)

"""
Orchestrator Agent
==================
Drives one auto-merge run, strictly in sequence:

    Gate → Commands → Change check → Commit/Push/PR → Wait → CI poll → Merge

Early exits (exit code 0):
    - the latest commit message fails the run gate
    - the commands left the working tree clean

Anything else that goes wrong raises an AutoMergeError and aborts the run.
The only suspension points are the pre-poll delay and the CI poll sleeps,
both through the injected ``sleep``.
"""
import logging
import time
from typing import Optional, Tuple

from app.agents.ci_monitor import CIMonitor, Clock, Sleep
from app.agents.git_agent import GitAgent
from app.agents.merge_agent import merge_pull_request
from app.core.config import AutoMergeConfig
from app.core.constants import DEFAULT_WAIT_SECONDS
from app.core.errors import AutoMergeError
from app.executor.command_runner import run_commands
from app.models.github import PullRequest
from app.services.github_client import GitHubClient
from app.services.results_writer import ResultsWriter
from app.state.run_state import RunState
from app.utils.run_gate import should_run

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Runs the full gate → publish → wait → merge sequence for one workspace.
    """

    def __init__(
        self,
        config: AutoMergeConfig,
        workspace_path: str = ".",
        git_agent: Optional[GitAgent] = None,
        github_client: Optional[GitHubClient] = None,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.config = config
        self.workspace_path = workspace_path
        self.git_agent = git_agent or GitAgent(workspace_path)
        self.github_client = github_client
        self.clock = clock
        self.sleep = sleep
        self.ci_monitor: Optional[CIMonitor] = None

    def _initial_state(self) -> RunState:
        return RunState(
            repository=f"{self.config.repo_owner}/{self.config.repo_name}",
            base_branch=self.config.base_branch,
            branch_name="",
            status="running",
            last_commit_message="",
            commands_run=[],
            pr_number=None,
            pr_url="",
            head_sha="",
            ci_state="",
            ci_polls=[],
            merge_sha="",
            start_time=self.clock(),
            duration_seconds=0.0,
            error="",
        )

    # -------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------
    def run(self) -> RunState:
        """
        Execute the run.

        Returns the final RunState for early exits and successful merges;
        raises the underlying AutoMergeError on any failure.
        """
        state = self._initial_state()
        owns_client = self.github_client is None
        client = self.github_client or GitHubClient(
            self.config.access_token, self.config.repo_owner, self.config.repo_name,
        )
        try:
            message = self.git_agent.latest_commit_message()
            state["last_commit_message"] = message
            if not should_run(message, self.config.policy):
                logger.info("Last commit %r does not pass the run gate. Exiting without action.", message)
                state["status"] = "skipped"
                return state

            state["commands_run"] = run_commands(self.config.commands, self.workspace_path)

            if not self.git_agent.has_pending_changes():
                logger.info("No changes detected after running commands. Nothing to commit.")
                state["status"] = "no_changes"
                return state

            pr, head_sha = self.commit_and_open_pr(client)
            state["branch_name"] = self.git_agent.branch_name
            state["pr_number"] = pr.number
            state["pr_url"] = pr.html_url
            state["head_sha"] = head_sha

            self.wait_before_polling()

            self.ci_monitor = CIMonitor(client, clock=self.clock, sleep=self.sleep)
            self.ci_monitor.wait_for_ci(
                head_sha,
                timeout=self.config.ci_timeout_seconds,
                interval=self.config.ci_interval_seconds,
            )
            state["ci_state"] = "success"

            response = merge_pull_request(client, pr, self.config.commit_prefix)
            state["merge_sha"] = response.sha
            state["status"] = "merged"
            logger.info("Completed merge into %s.", self.config.base_branch)
            return state

        except AutoMergeError as e:
            state["status"] = "failed"
            state["error"] = str(e)
            ci_state = getattr(e, "state", "")
            if ci_state:
                state["ci_state"] = ci_state
            raise

        finally:
            if self.ci_monitor and self.ci_monitor.last_run:
                state["ci_polls"] = [p.model_dump() for p in self.ci_monitor.last_run.polls]
            state["duration_seconds"] = round(self.clock() - state["start_time"], 3)
            if self.config.results_path:
                ResultsWriter.write_results(state, self.config.results_path)
            if owns_client:
                client.close()

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    def commit_and_open_pr(self, client: GitHubClient) -> Tuple[PullRequest, str]:
        """
        Commit everything on a new branch, push it, open the PR.

        Returns the PR and the head commit SHA to watch.
        """
        cfg = self.config
        git = self.git_agent

        branch = git.generate_branch_name()
        git.create_branch(branch)

        actor = cfg.git_actor
        git.configure_identity(actor, f"{actor}@users.noreply.github.com")
        git.stage_all()

        commit_message = f"{cfg.commit_prefix} Merge from {cfg.base_branch}"
        git.commit(commit_message)
        git.push(cfg.push_url, branch, secret=cfg.access_token)

        pr = client.create_pull_request(
            title=commit_message,
            head=branch,
            base=cfg.base_branch,
            body=f"Automated updates from {cfg.base_branch}.",
        )
        return pr, git.head_commit_sha()

    def wait_before_polling(self) -> None:
        """Give the CI provider time to register the new commit."""
        wait = self.config.wait_seconds
        if wait <= 0:
            wait = DEFAULT_WAIT_SECONDS
        logger.info("Waiting %g seconds before checking CI status...", wait)
        self.sleep(wait)

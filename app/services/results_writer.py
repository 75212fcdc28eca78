"""
Results Writer
==============
Serialises the final RunState into a JSON summary file.
"""
import json
import logging
import os

from app.state.run_state import RunState

logger = logging.getLogger(__name__)


class ResultsWriter:
    """
    Service responsible for writing the run summary for downstream CI steps.
    """

    @staticmethod
    def write_results(state: RunState, output_path: str = "results.json") -> bool:
        """
        Write the summary. A failure is logged and reported as False; it never
        changes the outcome of the run.
        """
        data = {
            "repository": {
                "name": state.get("repository", ""),
                "base_branch": state.get("base_branch", ""),
                "branch": state.get("branch_name", ""),
            },
            "pull_request": {
                "number": state.get("pr_number"),
                "url": state.get("pr_url", ""),
                "head_sha": state.get("head_sha", ""),
                "merge_sha": state.get("merge_sha", ""),
            },
            "ci": {
                "state": state.get("ci_state", ""),
                "polls": state.get("ci_polls", []),
            },
            "final_results": {
                "status": state.get("status", ""),
                "commands_run": state.get("commands_run", []),
                "duration_seconds": state.get("duration_seconds", 0.0),
                "error": state.get("error", ""),
            },
        }

        abs_output = os.path.abspath(output_path)
        try:
            logger.info("Writing run summary to %s", abs_output)
            with open(abs_output, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            return True
        except OSError as e:
            logger.error("Failed to write %s: %s", abs_output, e, exc_info=True)
            return False

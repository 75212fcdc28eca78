"""
Command Runner
==============
Runs the configured shell commands, in order, in the workspace.

BOUNDARY RULES:
    - Output streams are inherited; nothing is captured or parsed.
    - The first non-zero exit aborts the run; later commands never start.
    - The runner never touches git. That is the Git Agent's job.
"""
import logging
import subprocess
from typing import Iterable, List

from app.core.errors import CommandExecutionError

logger = logging.getLogger(__name__)

_SHELL = ["bash", "-lc"]


def run_commands(commands: Iterable[str], workspace_path: str = ".") -> List[str]:
    """
    Execute each non-blank command through ``bash -lc``.

    Returns
    -------
    List[str]
        The commands that ran, stripped.

    Raises
    ------
    CommandExecutionError
        On the first command that exits non-zero or cannot be started.
    """
    executed = []
    for raw in commands:
        command = raw.strip()
        if not command:
            continue
        logger.info("Running command: %s", command)
        try:
            proc = subprocess.run([*_SHELL, command], cwd=workspace_path, check=False)
        except OSError as e:
            raise CommandExecutionError(command, -1) from e
        if proc.returncode != 0:
            raise CommandExecutionError(command, proc.returncode)
        executed.append(command)
    return executed

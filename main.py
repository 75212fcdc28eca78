import argparse
import logging
import sys
from typing import List, Optional

from app.agents.orchestrator import Orchestrator
from app.core.config import load_config
from app.core.errors import AutoMergeError, ConfigurationError
from app.utils.logging_config import setup_logging

logger = logging.getLogger("main")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run commands, open a PR with the result, and squash-merge it once CI passes."
    )
    parser.add_argument("--workspace", default=".", help="Repository checkout to operate on.")
    parser.add_argument("--log-dir", default=None, help="Also write logs to a dated file here.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.INFO, log_dir=args.log_dir)

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1

    logging.getLogger().setLevel(config.log_level)

    try:
        state = Orchestrator(config, workspace_path=args.workspace).run()
    except AutoMergeError as e:
        logger.error("%s", e)
        return 1

    logger.info("Run finished with status: %s", state["status"])
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

"""
CI Monitor Agent
================
Polls the combined commit status on GitHub until CI resolves or a deadline
passes.

States: POLLING → SUCCEEDED | FAILED | TIMED_OUT

    - ``success``            → return normally
    - ``failure`` / ``error`` → raise CIFailure carrying the state
    - anything else          → keep polling (unknown labels count as pending)
    - elapsed > timeout      → raise CIFailure("timeout")
    - gateway error          → raise GatewayError at once, no retry

Polling is blocking and single-threaded: one commit per run, one sleep
between polls. Clock and sleep are injectable so tests never wait.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

import httpx

from app.core.constants import (
    CI_FAILURE_STATES,
    CI_SUCCESS,
    DEFAULT_CI_INTERVAL_SECONDS,
    DEFAULT_CI_TIMEOUT_SECONDS,
)
from app.core.errors import CIFailure, GatewayError
from app.models.ci_run import CIPollEvent, CIRun
from app.models.github import CombinedStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], None]


class StatusGateway(Protocol):
    def get_combined_status(self, sha: str) -> CombinedStatus: ...


@dataclass(frozen=True)
class CIWaitSession:
    """One wait on one commit. Discarded once the wait resolves."""
    commit_sha: str
    timeout: float
    interval: float
    start_time: float = field(compare=False)

    def elapsed(self, clock: Clock) -> float:
        return clock() - self.start_time

    def timed_out(self, clock: Clock) -> bool:
        # Strictly greater: elapsed == timeout still polls once more
        return self.elapsed(clock) > self.timeout


def _format_duration(seconds: float) -> str:
    """Render like Go's time.Duration: 50ms, 10s, 15m0s, 1h0m0s."""
    if seconds < 1:
        return f"{seconds * 1000:g}ms"
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{int(hours)}h{int(minutes)}m{secs:g}s"
    if minutes:
        return f"{int(minutes)}m{secs:g}s"
    return f"{secs:g}s"


class CIMonitor:
    """
    Agent that waits for a commit's combined status to resolve.
    """

    def __init__(
        self,
        gateway: StatusGateway,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.gateway = gateway
        self.clock = clock
        self.sleep = sleep
        self.last_run: Optional[CIRun] = None

    def wait_for_ci(
        self,
        commit_sha: str,
        timeout: float = DEFAULT_CI_TIMEOUT_SECONDS,
        interval: float = DEFAULT_CI_INTERVAL_SECONDS,
    ) -> None:
        """
        Block until CI for ``commit_sha`` succeeds.

        Raises
        ------
        CIFailure
            CI reported failure/error, or the timeout elapsed.
        GatewayError
            The status query failed.
        """
        if timeout <= 0:
            timeout = DEFAULT_CI_TIMEOUT_SECONDS
        if interval <= 0:
            interval = DEFAULT_CI_INTERVAL_SECONDS

        session = CIWaitSession(
            commit_sha=commit_sha,
            timeout=timeout,
            interval=interval,
            start_time=self.clock(),
        )
        run = CIRun(commit_sha=commit_sha, started_at=datetime.now(timezone.utc))
        self.last_run = run

        attempt = 0
        while True:
            attempt += 1
            try:
                status = self.gateway.get_combined_status(session.commit_sha)
            except (GatewayError, httpx.HTTPError) as e:
                self._finish(run, "gateway_error")
                raise GatewayError(
                    f"failed to fetch combined status: {e}",
                    status_code=getattr(e, "status_code", None),
                    body=getattr(e, "body", ""),
                ) from e

            state = (status.state or "").lower()
            run.polls.append(CIPollEvent(
                attempt=attempt,
                state=state,
                elapsed_seconds=round(session.elapsed(self.clock), 3),
                check_count=len(status.statuses),
            ))

            if state == CI_SUCCESS:
                self._finish(run, state)
                logger.info("CI succeeded for %s after %d poll(s)", commit_sha, attempt)
                return
            if state in CI_FAILURE_STATES:
                self._finish(run, state)
                raise CIFailure(f"ci reported {state}", state=state)
            if session.timed_out(self.clock):
                self._finish(run, "timeout")
                raise CIFailure(
                    f"ci did not finish within {_format_duration(timeout)}",
                    state="timeout",
                    timeout=timeout,
                )

            logger.info(
                "CI status is %s; checking again in %s...",
                status.state or "unknown", _format_duration(interval),
            )
            self.sleep(interval)

    @staticmethod
    def _finish(run: CIRun, status: str) -> None:
        run.status = status
        run.finished_at = datetime.now(timezone.utc)

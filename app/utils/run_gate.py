"""
Run Gate
========
Decides from the latest commit message whether this invocation should act.

Rules (all evaluated against the same message, pure, no I/O):
    - ignore prefixes    → any match suppresses the run (self-trigger guard)
    - require prefixes   → if any are configured, one must be a literal prefix
    - require substrings → if any are configured, one must occur in the message

Blank or whitespace-only entries are dropped before evaluation: they never
match and a list holding only blanks behaves like an empty list.
"""
from typing import Iterable, List

from app.models.run_policy import RunPolicy


def _active(rules: Iterable[str]) -> List[str]:
    return [r for r in rules if r and r.strip()]


def is_suppressed(message: str, ignore_prefixes: Iterable[str]) -> bool:
    """True when the message starts with any non-blank ignore prefix."""
    return any(message.startswith(prefix) for prefix in _active(ignore_prefixes))


def matches_required_prefix(message: str, require_prefixes: Iterable[str]) -> bool:
    rules = _active(require_prefixes)
    if not rules:
        return True
    return any(message.startswith(prefix) for prefix in rules)


def matches_required_substring(message: str, require_substrings: Iterable[str]) -> bool:
    rules = _active(require_substrings)
    if not rules:
        return True
    return any(marker in message for marker in rules)


def should_run(message: str, policy: RunPolicy) -> bool:
    """
    Combine the three predicates: not suppressed AND prefix AND substring.

    Parameters
    ----------
    message : str
        Latest commit subject line.
    policy : RunPolicy
        Configured rule lists.
    """
    if is_suppressed(message, policy.ignore_prefixes):
        return False
    return (
        matches_required_prefix(message, policy.require_prefixes)
        and matches_required_substring(message, policy.require_substrings)
    )

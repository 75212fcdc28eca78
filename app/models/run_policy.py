"""
Run Policy Model
================
String-matching rules deciding whether an invocation should act on the
latest commit message.

Fields:
    ignore_prefixes     - message starting with any of these suppresses the run
    require_prefixes    - if non-empty, the message must start with one of these
    require_substrings  - if non-empty, the message must contain one of these

Blank entries are inert: they never match and never count as "present".
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class RunPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    ignore_prefixes: Tuple[str, ...] = ()
    require_prefixes: Tuple[str, ...] = ()
    require_substrings: Tuple[str, ...] = ()

"""
CI Run Model
Pydantic records for one CI wait: the commit being watched and every poll made.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CIPollEvent(BaseModel):
    attempt: int
    state: str
    elapsed_seconds: float
    check_count: int = 0


class CIRun(BaseModel):
    commit_sha: str
    status: str = "pending"
    started_at: datetime
    finished_at: Optional[datetime] = None
    polls: List[CIPollEvent] = Field(default_factory=list)

from __future__ import annotations
from pydantic import BaseModel, Field
from uuid import UUID
from reservoir.schemas.submission import SubmissionRecord, SubmissionPublic


class ReservoirState(BaseModel):
    approved: list[SubmissionRecord] = Field(default_factory=list)   # newest first
    pending: list[SubmissionRecord] = Field(default_factory=list)
    total_litres: int = 0
    fill_percentage: float = 0.0
    goal_litres: int


class ReservoirPublic(BaseModel):
    approved: list[SubmissionPublic]
    pending: list[SubmissionPublic]
    total_litres: int
    fill_percentage: float
    goal_litres: int
    stale: bool = False


class SubmitResponse(BaseModel):
    message: str
    submission_id: UUID
    state: ReservoirPublic


class ApproveResponse(BaseModel):
    submission_id: UUID
    state: ReservoirPublic

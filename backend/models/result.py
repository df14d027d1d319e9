"""Analysis result data models"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .region import Region


class ResultId(BaseModel):
    """Identity of a result: owning log, run index and result index"""

    model_config = ConfigDict(frozen=True)

    log_uri: str
    run_index: int = 0
    result_index: int


class StepLocation(BaseModel):
    """One step of a result's thread flow"""

    artifact_uri: str | None = None
    region: Region | None = None
    message: str | None = None


class AnalysisResult(BaseModel):
    """A normalized analysis result with its ordered steps"""

    id: ResultId
    rule_id: str | None = None
    message: str | None = None
    locations: list[StepLocation] = []


class AnalysisLog(BaseModel):
    """A loaded analysis log"""

    uri: str
    revision_id: str | None = None  # commit the analysis ran against
    results: list[AnalysisResult] = []

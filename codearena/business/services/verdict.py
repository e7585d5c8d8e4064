from typing import Any, Optional

from codearena.data.schemas import Verdict

JUDGE0_STATUS_VERDICTS = {
    3: Verdict.ACCEPTED,
    4: Verdict.WRONG_ANSWER,
    5: Verdict.TIME_LIMIT_EXCEEDED,
    6: Verdict.COMPILATION_ERROR,
    7: Verdict.RUNTIME_ERROR,
}


def map_status_id(status_id: Optional[int]) -> Verdict:
    """Map a Judge0 status id to a verdict; unknown ids become Internal Error."""
    if not isinstance(status_id, int) or isinstance(status_id, bool):
        return Verdict.INTERNAL_ERROR
    return JUDGE0_STATUS_VERDICTS.get(status_id, Verdict.INTERNAL_ERROR)


def map_judge0_status(status: Any) -> Verdict:
    """Map the judge's ``{"id": ..., "description": ...}`` status object."""
    if not isinstance(status, dict):
        return Verdict.INTERNAL_ERROR
    return map_status_id(status.get("id"))

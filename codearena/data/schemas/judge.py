from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class JudgeSettings(BaseModel):
    """Connection settings handed to the judge client."""

    base_url: str
    api_key: str
    api_host: str
    timeout: float = 30.0

    @classmethod
    def from_config(cls, config) -> "JudgeSettings":
        return cls(
            base_url=config.JUDGE0_API_URL,
            api_key=config.JUDGE0_API_KEY,
            api_host=config.JUDGE0_API_HOST,
            timeout=config.JUDGE0_TIMEOUT,
        )


class CodeExecutionRequest(BaseModel):
    language_id: int = Field(..., ge=1)
    source_code: str = Field(..., min_length=1)
    stdin: Optional[str] = ""


class CodeExecutionResponse(BaseModel):
    stdout: Optional[str] = None
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    status: Dict[str, Any] = {}
    time: Optional[float] = None
    memory: Optional[float] = None


class JudgeHealthResponse(BaseModel):
    success: bool
    message: str
    output: Optional[str] = None
    status: Optional[str] = None

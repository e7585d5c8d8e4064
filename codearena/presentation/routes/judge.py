from fastapi import APIRouter, Depends

from codearena.business.services import get_current_user
from codearena.config import logger
from codearena.data.repositories import Judge0Client, get_judge_client
from codearena.data.schemas import (
    CodeExecutionRequest,
    CodeExecutionResponse,
    JudgeHealthResponse,
    UserBaseResponse,
)
from codearena.errors import JudgeUnavailableException

judge_logger = logger.getChild("judge")

judge_router = APIRouter(tags=["judge"])

HELLO_WORLD_PYTHON = "print('Hello from Judge0!')"


@judge_router.post(
    "/code/execute",
    response_model=CodeExecutionResponse,
    summary="Run code",
    description="Runs code on the judge with custom input. Nothing is stored.",
)
async def execute_code(
    request: CodeExecutionRequest,
    judge_client: Judge0Client = Depends(get_judge_client),
    current_user: UserBaseResponse = Depends(get_current_user),
):
    judge_logger.info(
        f"Code execution for user {current_user.id}, language {request.language_id}"
    )
    result = await judge_client.submit_and_wait(
        source_code=request.source_code,
        language_id=request.language_id,
        stdin=request.stdin,
    )
    return CodeExecutionResponse(
        stdout=result.get("stdout"),
        stderr=result.get("stderr"),
        compile_output=result.get("compile_output"),
        status=result.get("status") if isinstance(result.get("status"), dict) else {},
        time=result.get("time"),
        memory=result.get("memory"),
    )


@judge_router.get(
    "/test/judge0",
    response_model=JudgeHealthResponse,
    summary="Check judge connectivity",
)
async def test_judge0(judge_client: Judge0Client = Depends(get_judge_client)):
    try:
        result = await judge_client.submit_and_wait(
            source_code=HELLO_WORLD_PYTHON, language_id=71, stdin=""
        )
    except JudgeUnavailableException as e:
        judge_logger.error(f"Judge0 API test failed: {e.error}")
        raise JudgeUnavailableException(error=e.error, detail="Judge0 API test failed")

    status = result.get("status") or {}
    return JudgeHealthResponse(
        success=True,
        message="Judge0 API test successful",
        output=result.get("stdout"),
        status=status.get("description") if isinstance(status, dict) else None,
    )

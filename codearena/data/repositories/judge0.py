from typing import Any, Dict, Optional

import httpx

from codearena.config import Config, logger
from codearena.data.schemas import JudgeSettings
from codearena.errors import JudgeUnavailableException

judge_logger = logger.getChild("judge0")


class Judge0Client:
    """Thin async client for a Judge0 deployment behind RapidAPI."""

    def __init__(
        self,
        settings: JudgeSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self.headers = {
            "x-rapidapi-key": settings.api_key,
            "x-rapidapi-host": settings.api_host,
            "Content-Type": "application/json",
        }
        self._transport = transport

    async def submit_and_wait(
        self,
        source_code: str,
        language_id: int,
        stdin: Optional[str] = "",
        expected_output: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Submit code and block on the judge side until a final status is known.

        Args:
            source_code: The solution code
            language_id: Judge0 language identifier
            stdin: Input fed to the program
            expected_output: Output the judge compares stdout against

        Returns:
            The decoded judge payload (status, time, memory, stdout, ...)

        Raises:
            JudgeUnavailableException: on transport errors, non-2xx
                responses or a payload that is not a JSON object
        """
        payload = {
            "source_code": source_code,
            "language_id": language_id,
            "stdin": stdin or "",
        }
        if expected_output is not None:
            payload["expected_output"] = expected_output

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.settings.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/submissions",
                    params={"base64_encoded": "false", "wait": "true"},
                    json=payload,
                )
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            judge_logger.error(
                f"Judge0 returned {e.response.status_code}: {e.response.text}"
            )
            raise JudgeUnavailableException(
                error=f"Judge0 returned status {e.response.status_code}"
            )
        except httpx.HTTPError as e:
            judge_logger.error(f"Judge0 request failed: {str(e)}")
            raise JudgeUnavailableException(error=f"Judge0 request failed: {str(e)}")
        except ValueError as e:
            judge_logger.error(f"Judge0 returned invalid JSON: {str(e)}")
            raise JudgeUnavailableException(error="Judge0 returned invalid JSON")

        if not isinstance(result, dict):
            judge_logger.error(f"Unexpected Judge0 payload: {result!r}")
            raise JudgeUnavailableException(error="Judge0 returned a malformed payload")

        judge_logger.info(
            f"Judge0 finished language {language_id} with status {result.get('status')}"
        )
        return result


def get_judge_client() -> Judge0Client:
    """Dependency returning a judge client built from the application settings."""
    return Judge0Client(JudgeSettings.from_config(Config))

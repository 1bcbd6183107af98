"""Proposal client backed by the remote AI jobs endpoint."""

from __future__ import annotations

from typing import Any

import httpx

from scenewright.config import get_logger
from scenewright.exceptions import ProposalError
from scenewright.proposals.base import ProposalClient, ProposalRequest

logger = get_logger(__name__)

JOBS_PATH = "/ai/jobs"


class HttpProposalClient(ProposalClient):
    """POST proposal jobs to ``<endpoint>/ai/jobs``.

    Failures are raised as ``ProposalError``. Nothing is retried.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Base URL of the proposal service
            api_key: Optional bearer token
            timeout: HTTP request timeout in seconds
            client: Optional preconfigured HTTP client
        """
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

        logger.info(
            "Initialized proposal client",
            endpoint=self.endpoint,
            has_api_key=bool(self.api_key),
            timeout=timeout,
        )

    async def __aenter__(self) -> HttpProposalClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *_: Any) -> None:
        """Exit async context manager and cleanup."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def propose(self, request: ProposalRequest) -> dict[str, Any]:
        """Submit a job and return its ``output_payload``.

        Raises:
            ProposalError: On transport errors, non-2xx responses or a
                malformed response body
        """
        body = {
            "screenplay_id": request.screenplay_id,
            "state_context": request.stage.value,
            "prompt_template_id": int(request.template_id),
            "input_payload": request.payload,
        }
        url = f"{self.endpoint}{JOBS_PATH}"
        logger.debug(
            "Submitting proposal job",
            url=url,
            template=request.template_id.name,
            screenplay_id=request.screenplay_id,
        )

        try:
            response = await self.client.post(url, json=body, headers=self._headers())
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProposalError(
                message=f"Proposal service returned {e.response.status_code}",
                hint="Check proposal_endpoint and proposal_api_key",
                details={"url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise ProposalError(
                message=f"Proposal service unreachable: {e}",
                hint="Check your network connection and proposal_endpoint",
                details={"url": url, "error_type": type(e).__name__},
            ) from e
        except ValueError as e:
            raise ProposalError(
                message="Proposal service returned invalid JSON",
                details={"url": url},
            ) from e

        output = data.get("output_payload") if isinstance(data, dict) else None
        if output is None:
            logger.warning("Proposal job returned no output", url=url)
            return {}
        if not isinstance(output, dict):
            raise ProposalError(
                message="Proposal output_payload is not an object",
                details={"url": url, "type": type(output).__name__},
            )
        return output

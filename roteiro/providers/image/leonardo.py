"""
Leonardo AI Image Provider - job-based REST API

Generation is asynchronous: POST /generations returns a generation id,
GET /generations/{id} is polled until images appear or a failure status
is reported. Response shapes vary between API versions, so both calls
accept several known layouts.

API Docs: https://docs.leonardo.ai/
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from roteiro.jobs import JobBackend, PollSnapshot, SubmitOutcome
from ..registry import get_provider
from ..transport import HttpTransport


@dataclass
class ImageParams:
    """Per-topic image request"""
    prompt: str
    width: int = 1024
    height: int = 1024
    model_id: str = "e316348f-7773-490e-9ce1-2fa6f8ad5f2b"  # Leonardo default model


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _get(data: Any, key: str) -> Any:
    return data.get(key) if isinstance(data, dict) else None


def extract_generation_id(data: Any) -> Optional[str]:
    """Job handle from a submission response"""
    return _first(
        _get(_get(data, "sdGenerationJob"), "generationId"),
        _get(data, "generationId"),
        _get(data, "id"),
    )


def parse_generation(data: Any) -> PollSnapshot:
    """Status and first image URL from a status response"""
    record = _first(_get(data, "generations_by_pk"), _get(data, "generation"), data)

    status = _first(
        _get(record, "status"),
        _get(_get(record, "generation"), "status"),
        _get(_get(record, "sdGenerationJob"), "status"),
    )
    images = _first(
        _get(record, "generated_images"),
        _get(record, "images"),
        _get(_get(record, "generation"), "generated_images"),
    ) or []

    url = None
    if isinstance(images, list) and images:
        first = images[0]
        url = _first(_get(first, "url"), _get(_get(first, "image"), "url"))

    return PollSnapshot(
        reachable=True,
        status=status if isinstance(status, str) else None,
        artifact_url=url if isinstance(url, str) else None,
    )


class LeonardoImageClient(JobBackend):
    """Wire protocol for Leonardo AI image generations"""

    provider_id = "leonardo"
    failure_statuses = frozenset({"FAILED", "CANCELED", "ERROR"})

    def __init__(self, transport: HttpTransport, base_url: Optional[str] = None):
        self.transport = transport
        self.base_url = base_url or get_provider(self.provider_id).endpoint_base

    def _headers(self, credential: str, with_body: bool = True) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {credential}"}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def build_submit_body(self, params: ImageParams) -> Dict[str, Any]:
        return {
            "prompt": params.prompt,
            "modelId": params.model_id,
            "num_images": 1,
            "width": params.width,
            "height": params.height,
            "public": False,
        }

    async def submit(self, credential: str, params: ImageParams) -> SubmitOutcome:
        response = await self.transport.request(
            "POST",
            f"{self.base_url}/generations",
            headers=self._headers(credential),
            json=self.build_submit_body(params),
        )

        if not response.ok:
            return SubmitOutcome(
                accepted=False,
                status_code=response.status,
                error_message=f"Leonardo submission failed ({response.status}): {response.text()[:500]}",
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        generation_id = extract_generation_id(data)
        if not generation_id:
            return SubmitOutcome(
                accepted=False,
                status_code=response.status,
                error_message="Unexpected Leonardo response (no generationId)",
            )

        return SubmitOutcome(accepted=True, job_id=generation_id, status_code=response.status)

    async def fetch(self, credential: str, job_id: str) -> PollSnapshot:
        response = await self.transport.request(
            "GET",
            f"{self.base_url}/generations/{job_id}",
            headers=self._headers(credential, with_body=False),
        )

        if not response.ok:
            return PollSnapshot(reachable=False, status_code=response.status)

        try:
            data = response.json()
        except ValueError:
            return PollSnapshot(
                reachable=False,
                status_code=response.status,
                error_message="Status response was not JSON",
            )

        return parse_generation(data)

"""AI-generated company overviews."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..models.company import Company
from .config import AppConfig, get_config

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You write crisp, neutral company summaries."


class SummaryError(Exception):
    """Raised when a summary cannot be produced."""

    def __init__(self, error: str, message: str) -> None:
        super().__init__(message)
        self.error = error
        self.message = message


def build_prompt(company: Company) -> str:
    return (
        f"Create a concise 2-3 sentence overview for {company.name}. "
        f"Description: {company.description}. Sector: {company.sector}. "
        "Audience: product and GTM leaders."
    )


class SummaryService:
    """Calls an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        self.config = config or get_config()
        self.transport = transport
        self.timeout = timeout

    async def summarize(self, company: Company) -> str:
        api_key = self.config.openai_api_key
        if not api_key:
            raise SummaryError("not_configured", "OPENAI_API_KEY not configured")

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.config.openai_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(company)},
            ],
            "temperature": 0.5,
            "max_tokens": 200,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.config.openai_base_url.rstrip('/')}/chat/completions",
                    headers=headers,
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            logger.exception("Summary request failed for company %s", company.id)
            raise SummaryError("provider_error", "Failed to generate summary") from exc

        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""


def get_summary_service() -> SummaryService:
    return SummaryService(get_config())


__all__ = ["SummaryService", "SummaryError", "build_prompt", "get_summary_service"]

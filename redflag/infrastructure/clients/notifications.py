"""Scan completion webhook client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from redflag.config import settings
from redflag.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram

logger = logging.getLogger(__name__)


class NotificationClient:
    """Client for sending scan lifecycle events to a subscriber URL"""

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
    ):
        self.webhook_url = webhook_url if webhook_url is not None else settings.scan_webhook_url
        self.timeout = timeout or settings.http_timeout_seconds
        # Always at least one delivery attempt
        self.max_retries = max(1, max_retries if max_retries is not None else settings.webhook_max_retries)
        self.backoff_base = backoff_base if backoff_base is not None else settings.webhook_backoff_base

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def send_scan_completed(self, payload: Dict[str, Any]) -> None:
        """
        Deliver a SCAN_COMPLETED event with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1) → 1s, 2s, 4s, 8s
        - Retries on HTTP error statuses and network failures
        - Re-raises after the final attempt

        No-op when no webhook URL is configured.
        """
        if not self.enabled:
            return

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()
                    logger.warning(
                        f"Webhook delivery failed: {e}",
                        extra={"attempt": attempt, "scan_id": payload.get("scan_id")},
                    )

                    if attempt >= self.max_retries:
                        raise

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

"""
Base client for AI operations.
Provides the HTTP plumbing shared by completion providers.
"""
from typing import Dict, Any, Optional
import httpx
from app.core.config import get_settings
from app.core.constants import LimitsConstants
from app.utils.prompt_loader import get_prompt_loader
from app.core.logging import get_logger

logger = get_logger("core.base_client")

class BaseAIClient:
    """Base client for interacting with AI Models."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.prompt_loader = get_prompt_loader()
        self.timeout = LimitsConstants.LLM_TIMEOUT_SECONDS
        self.transport = transport

    async def _make_request(
        self,
        url: str,
        payload: Dict[str, Any],
        log_prefix: str = "AI Client",
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Make a generic HTTP POST request to the AI provider.

        Args:
            url: The full API endpoint URL.
            payload: The JSON payload to send.
            log_prefix: Prefix for log messages.
            headers: Extra request headers (e.g. authorization).

        Returns:
            The parsed JSON response.

        Raises:
            httpx.HTTPStatusError: If the API returns an error status.
        """
        logger.debug(f"[{log_prefix}] Calling {url}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(url, json=payload, headers=headers)

            logger.debug(f"[{log_prefix}] Response status: {response.status_code}")
            if response.status_code != 200:
                logger.error(f"[{log_prefix}] Error response: {response.text[:500]}")

            response.raise_for_status()
            return response.json()

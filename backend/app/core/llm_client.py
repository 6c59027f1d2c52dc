"""
LLM client for text-based AI operations.
Model-agnostic interface for menu copywriting.
"""
from typing import Dict, List, Optional

from app.core.constants import MenuConstants
from app.core.logging import get_logger
from app.core.base_client import BaseAIClient

logger = get_logger("core.llm_client")


class LLMClient(BaseAIClient):
    """Client for interacting with Language Models."""

    async def _call_ollama(self, prompt: str, system: Optional[str] = None) -> str:
        """Call Ollama API."""
        url = f"{self.settings.llm_base_url}/api/generate"

        payload = {
            "model": self.settings.llm_model,
            "prompt": prompt,
            "stream": False
        }

        if system:
            payload["system"] = system

        response_json = await self._make_request(url, payload, log_prefix="LLM Client")
        return response_json["response"]

    async def _call_openai(self, prompt: str, system: Optional[str] = None) -> str:
        """Call an OpenAI-compatible chat completions API."""
        url = f"{self.settings.llm_base_url.rstrip('/')}/chat/completions"

        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.settings.llm_model,
            "messages": messages
        }

        headers = {}
        if self.settings.openai_api_key:
            headers["Authorization"] = f"Bearer {self.settings.openai_api_key}"

        response_json = await self._make_request(
            url, payload, log_prefix="LLM Client", headers=headers
        )
        return response_json["choices"][0]["message"]["content"]

    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        """
        Send a single prompt to the configured provider.

        Raises:
            ValueError: If ``llm_provider`` is not supported.
        """
        provider = self.settings.llm_provider.lower()
        if provider == "openai":
            return await self._call_openai(prompt, system)
        if provider == "ollama":
            return await self._call_ollama(prompt, system)
        raise ValueError(f"Unsupported LLM provider: {self.settings.llm_provider}")

    async def enhance_description(
        self,
        name: str,
        old_description: Optional[str] = None,
        brand_voice: Optional[str] = None
    ) -> str:
        """
        Rewrite a menu item's description.

        Args:
            name: Item name
            old_description: Current description, may be empty
            brand_voice: Optional hint for the tone of the rewrite

        Returns:
            The rewritten description, stripped of surrounding whitespace
        """
        template = self.prompt_loader.get_prompt_template("description_enhancement")
        system_prompt = self.prompt_loader.get_system_prompt("description_enhancement")

        prompt = template.format(
            name=name,
            old_description=old_description or "",
            brand_voice=brand_voice or MenuConstants.DEFAULT_BRAND_VOICE
        )

        response = await self.complete(prompt, system_prompt)
        return response.strip()


# Global instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create global LLMClient instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client

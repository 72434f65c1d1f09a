"""Planner agent: asks the configured LLM provider for a structured edit plan."""

import logging
from typing import Any

from anthropic import Anthropic
import openai

from clawcode.agents.exceptions import AgentError, LLMResponseError, ProviderConfigError
from clawcode.agents.plan_parser import parse_plan_json
from clawcode.models import AgentPlan, ProviderConfig

logger = logging.getLogger(__name__)

TEMPERATURE = 0.2
MAX_TOKENS = 4096

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
AZURE_API_VERSION = "2024-06-01"

DEFAULT_MODELS = {
    "groq": "openai/gpt-oss-120b",
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-sonnet-4-5-20250929",
}

PROVIDER_LABELS = {
    "azure": "Azure OpenAI",
    "groq": "Groq",
    "gemini": "Google Gemini",
    "openai": "OpenAI",
    "anthropic": "Anthropic",
}


class Planner:
    """Requests edit plans from one LLM provider.

    Azure, Groq, Gemini and OpenAI are reached through the OpenAI SDK (the
    latter three via OpenAI-compatible base URLs); Anthropic uses its own SDK.
    """

    def __init__(
        self,
        provider_config: ProviderConfig,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ):
        """Initialize the planner.

        Args:
            provider_config: Provider credentials and optional model override.
            temperature: Sampling temperature for plan requests.
            max_tokens: Maximum completion tokens.

        Raises:
            ProviderConfigError: If the config is missing required fields.
        """
        self.provider_config = provider_config
        self.provider = provider_config.provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.model = self._resolve_model()
        self._anthropic_client: Anthropic | None = None
        self._openai_client: openai.OpenAI | None = None

        if self.provider == "anthropic":
            self._anthropic_client = Anthropic(api_key=provider_config.api_key)
        else:
            self._openai_client = self._create_openai_client()

    def _resolve_model(self) -> str:
        config = self.provider_config
        if self.provider == "azure":
            if not config.endpoint:
                raise ProviderConfigError("Azure provider requires an endpoint")
            return config.deployment or config.model or "gpt-4o"
        return config.model or DEFAULT_MODELS[self.provider]

    def _create_openai_client(self) -> openai.OpenAI:
        config = self.provider_config
        if self.provider == "azure":
            return openai.AzureOpenAI(
                api_key=config.api_key,
                azure_endpoint=config.endpoint,
                api_version=AZURE_API_VERSION,
            )
        if self.provider == "groq":
            return openai.OpenAI(api_key=config.api_key, base_url=GROQ_BASE_URL)
        if self.provider == "gemini":
            return openai.OpenAI(api_key=config.api_key, base_url=GEMINI_BASE_URL)
        return openai.OpenAI(api_key=config.api_key)

    @property
    def label(self) -> str:
        return PROVIDER_LABELS[self.provider]

    def get_structured_plan(self, system_prompt: str, user_prompt: str) -> AgentPlan:
        """Request a plan and parse it.

        Args:
            system_prompt: Instructions and the plan JSON schema.
            user_prompt: Task, file listing and file contents.

        Returns:
            Coerced AgentPlan.

        Raises:
            LLMResponseError: If the call fails or the completion is empty.
            PlanParseError: If the completion is not a JSON object.
        """
        text = self._complete(system_prompt, user_prompt)
        return parse_plan_json(text)

    def _complete(self, system_prompt: str, user_prompt: str) -> str:
        logger.info("Requesting plan from %s (model=%s)", self.label, self.model)
        try:
            if self._anthropic_client is not None:
                response = self._anthropic_client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                    system=system_prompt,
                    messages=[{"role": "user", "content": user_prompt}],
                )
                content = self._anthropic_text(response)
            else:
                response = self._openai_client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
                content = self._openai_text(response)
        except AgentError:
            raise
        except Exception as e:
            raise LLMResponseError(f"{self.label} request failed: {e}") from e

        if not content or not content.strip():
            raise LLMResponseError(f"Empty response from {self.label}")
        return content

    def _anthropic_text(self, response: Any) -> str:
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )

    def _openai_text(self, response: Any) -> str:
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

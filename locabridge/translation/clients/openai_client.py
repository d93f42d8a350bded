"""Chat-completion client for DeepSeek, Gemini and Aliyun via their OpenAI-compatible APIs."""

import json
import logging
from typing import Dict, List, Optional
from openai import OpenAI, OpenAIError

from ...config import Config, config as default_config
from ...errors import TranslationError

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Translates batches of texts with a hosted chat model."""

    def __init__(
        self,
        service: str,
        api_key: Optional[str] = None,
        settings: Optional[Config] = None,
        client: Optional[OpenAI] = None,
    ):
        """
        Initialize the client.

        Args:
            service: One of "deepseek", "gemini", "aliyun"
            api_key: API key. If not provided, uses the service's key from the environment.
            settings: Configuration to read models and endpoints from
            client: Pre-built OpenAI client (mainly for tests)
        """
        self.config = settings or default_config
        if service not in self.config.SERVICE_SETTINGS:
            raise ValueError(f"Unsupported chat service: {service}")
        self.service = service
        self.settings = self.config.SERVICE_SETTINGS[service]
        self.api_key = api_key or self.config.api_key_for(service)
        if not self.api_key and client is None:
            raise ValueError(f"{self.settings.api_key_env} is required for {service}")
        self.client = client or OpenAI(api_key=self.api_key, base_url=self.settings.base_url)
        self.model = self.settings.model
        self.temperature = self.config.temperature

    @property
    def name(self) -> str:
        return self.service

    def translate_batch(
        self,
        texts: List[str],
        target_lang: str,
        source_lang: Optional[str] = None,
    ) -> List[str]:
        """
        Translate texts, returning results in the same order.

        Raises:
            TranslationError: on API failure or an unusable response
        """
        if not texts:
            return []

        try:
            if self.settings.batch_json:
                return self._translate_json(texts, target_lang, source_lang)
            return [self._translate_single(t, target_lang, source_lang) for t in texts]
        except OpenAIError as e:
            raise TranslationError(f"{self.service} request failed: {e}") from e

    def _translate_json(
        self,
        texts: List[str],
        target_lang: str,
        source_lang: Optional[str],
    ) -> List[str]:
        batch_items = [{"id": str(i), "text": t} for i, t in enumerate(texts)]

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self._build_batch_system_prompt()},
                {"role": "user", "content": self._build_batch_user_prompt(
                    batch_items, target_lang, source_lang
                )},
            ],
            temperature=self.temperature,
            max_tokens=self.config.max_completion_tokens,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = self._parse_batch_response(content)

        # Ensure order matches input by using IDs
        result_map = {str(item.get("id")): item.get("translation") for item in parsed}
        missing = [str(i) for i in range(len(texts)) if not isinstance(result_map.get(str(i)), str)]
        if missing:
            raise TranslationError(
                f"{self.service} response is missing {len(missing)} of {len(texts)} translations"
            )
        logger.debug("%s translated %d texts to %s", self.service, len(texts), target_lang)
        return [result_map[str(i)] for i in range(len(texts))]

    def _translate_single(self, text: str, target_lang: str, source_lang: Optional[str]) -> str:
        """Dedicated translation models take the bare text plus translation options."""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": text}],
            extra_body={
                "translation_options": {
                    "source_lang": self.config.language_name(source_lang) if source_lang else "auto",
                    "target_lang": self.config.language_name(target_lang),
                }
            },
        )
        content = response.choices[0].message.content
        if content is None:
            raise TranslationError(f"{self.service} returned an empty response")
        return content.strip()

    def _build_batch_system_prompt(self) -> str:
        """Build system prompt for batch JSON translation."""
        return """You are an expert software localization translator for mobile, desktop and web apps.

You will receive a JSON object with a "translations" array. Each item has "id" and "text".
Return a JSON object with a "translations" array. Each item must have "id" and "translation".
The order and IDs must match exactly.

CRITICAL RULES:
1. Return ONLY valid JSON - no explanations, no markdown
2. Preserve ALL format specifiers exactly: %@, %d, %lld, %f, %%, %1$@, {name}, {{count}}, $1
3. Positional specifiers may be reordered but MUST keep the same numbers
4. Keep translations concise for UI
5. Preserve emojis, HTML tags and whitespace exactly
6. If unable to translate an item, use the original text"""

    def _build_batch_user_prompt(
        self,
        batch_items: List[Dict[str, str]],
        target_lang: str,
        source_lang: Optional[str],
    ) -> str:
        """Build user prompt for batch translation."""
        request_obj = {"translations": batch_items}
        target_name = self.config.language_name(target_lang)
        if source_lang:
            header = f"Translate from {self.config.language_name(source_lang)} to {target_name} ({target_lang})"
        else:
            header = f"Translate to {target_name} ({target_lang})"
        return f"{header}:\n\n{json.dumps(request_obj, ensure_ascii=False, indent=2)}"

    def _parse_batch_response(self, response: str) -> List[Dict[str, str]]:
        """Parse JSON response from batch translation."""
        text = response.strip()
        # Some providers wrap JSON in a markdown fence despite instructions
        if text.startswith("```"):
            text = text.strip("`")
            if text.lower().startswith("json"):
                text = text[4:]
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TranslationError(f"Failed to parse {self.service} response: {e}") from e

        # Handle both direct array and wrapped object
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict) and isinstance(data.get("translations"), list):
            items = data["translations"]
        else:
            raise TranslationError(f"Unexpected JSON structure in {self.service} response")
        return [item for item in items if isinstance(item, dict)]

"""Configuration management for the localization pipeline."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from dotenv import load_dotenv

load_dotenv()

SERVICES = ("deepseek", "gemini", "aliyun", "deepl")


@dataclass
class ServiceSettings:
    """Connection settings for one chat-completion provider."""

    base_url: str
    model: str
    api_key_env: str
    batch_json: bool = True  # False: one request per text


@dataclass
class Config:
    """Application configuration."""

    # Selected provider
    ai_service: str = field(
        default_factory=lambda: os.getenv("LOCABRIDGE_AI_SERVICE", "deepseek").lower()
    )

    # API Keys
    deepseek_api_key: str = field(default_factory=lambda: os.getenv("DEEPSEEK_API_KEY", ""))
    gemini_api_key: str = field(default_factory=lambda: os.getenv("GEMINI_API_KEY", ""))
    aliyun_api_key: str = field(default_factory=lambda: os.getenv("DASHSCOPE_API_KEY", ""))
    deepl_api_key: str = field(default_factory=lambda: os.getenv("DEEPL_API_KEY", ""))

    # Language of single-language input files (.strings, .json, .arb without @@locale)
    source_language: str = field(
        default_factory=lambda: os.getenv("LOCABRIDGE_SOURCE_LANGUAGE", "en")
    )

    # Translation settings
    batch_size: int = field(
        default_factory=lambda: int(os.getenv("LOCABRIDGE_BATCH_SIZE", "20"))
    )
    temperature: float = 0.3
    max_completion_tokens: int = 4000

    SERVICE_SETTINGS: Dict[str, ServiceSettings] = field(default_factory=lambda: {
        "deepseek": ServiceSettings(
            base_url="https://api.deepseek.com",
            model="deepseek-chat",
            api_key_env="DEEPSEEK_API_KEY",
        ),
        "gemini": ServiceSettings(
            base_url="https://generativelanguage.googleapis.com/v1beta/openai/",
            model="gemini-2.0-flash",
            api_key_env="GEMINI_API_KEY",
        ),
        "aliyun": ServiceSettings(
            base_url="https://dashscope.aliyuncs.com/compatible-mode/v1",
            model="qwen-mt-turbo",
            api_key_env="DASHSCOPE_API_KEY",
            batch_json=False,
        ),
    })

    # Language display names (for prompts)
    LANGUAGE_NAMES: Dict[str, str] = field(default_factory=lambda: {
        "en": "English",
        "en-CA": "English (Canada)",
        "en-GB": "English (UK)",
        "en-IN": "English (India)",
        "de": "German",
        "fr": "French",
        "es": "Spanish",
        "it": "Italian",
        "ja": "Japanese",
        "ko": "Korean",
        "ru": "Russian",
        "pt": "Portuguese",
        "zh-Hans": "Simplified Chinese",
        "zh-Hant": "Traditional Chinese",
    })

    def api_key_for(self, service: str) -> str:
        return {
            "deepseek": self.deepseek_api_key,
            "gemini": self.gemini_api_key,
            "aliyun": self.aliyun_api_key,
            "deepl": self.deepl_api_key,
        }.get(service, "")

    def language_name(self, code: str) -> str:
        return self.LANGUAGE_NAMES.get(code, code)

    def validate(self, service: Optional[str] = None) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        service = (service or self.ai_service).lower()
        if service not in SERVICES:
            errors.append(f"Unknown AI service '{service}' (expected one of {', '.join(SERVICES)})")
            return errors
        if not self.api_key_for(service):
            env_name = "DEEPL_API_KEY" if service == "deepl" else self.SERVICE_SETTINGS[service].api_key_env
            errors.append(f"{env_name} is not set")
        if self.batch_size < 1:
            errors.append("LOCABRIDGE_BATCH_SIZE must be at least 1")
        return errors


# Global config instance
config = Config()

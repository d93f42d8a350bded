"""Translation API clients."""

from typing import Optional

from ...config import Config, config as default_config
from .deepl_client import DeepLClient
from .openai_client import ChatCompletionClient


def create_client(service: Optional[str] = None, settings: Optional[Config] = None):
    """Build the client for a configured service name."""
    settings = settings or default_config
    service = (service or settings.ai_service).lower()
    if service == "deepl":
        return DeepLClient(api_key=settings.deepl_api_key)
    return ChatCompletionClient(service, settings=settings)


__all__ = ["ChatCompletionClient", "DeepLClient", "create_client"]

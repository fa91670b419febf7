from .base_client import OpenAICompatibleClient


class OpenAIClient(OpenAICompatibleClient):
    """High-quality backend served by the OpenAI API."""

    provider_name = "openai"
    default_model = "gpt-4o-mini"

from config.config import GROQ_BASE_URL

from .base_client import OpenAICompatibleClient


class GroqClient(OpenAICompatibleClient):
    """
    Fast, low-cost backend.

    Uses the OpenAI SDK with Groq's OpenAI-compatible base URL.
    """

    provider_name = "groq"
    default_model = "llama3-8b-8192"
    base_url = GROQ_BASE_URL

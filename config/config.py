import os
from pathlib import Path

from dotenv import load_dotenv

from utils.logger import get_logger

logger = get_logger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
CREDENTIAL_KEYS = ("GROQ_API_KEY", "OPENAI_API_KEY")


class Config:
    """Configuration management for the router service."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Provider credentials
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.GROQ_API_KEY = os.getenv("GROQ_API_KEY")

        # Models
        self.FAST_MODEL = os.getenv("FAST_MODEL", "llama3-8b-8192")
        self.QUALITY_MODEL = os.getenv("QUALITY_MODEL", "gpt-4o-mini")
        self.GROQ_BASE_URL = os.getenv("GROQ_BASE_URL", GROQ_BASE_URL)
        self.TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))

        # Server
        self.HOST = os.getenv("HOST", "127.0.0.1")
        self.PORT = int(os.getenv("PORT", "8787"))

    def validate(self, required: list[str] | None = None) -> list[str]:
        """
        Check that provider credentials are present.

        Args:
            required: Credential names to check (default: every provider key)

        Returns:
            list[str]: Names of missing environment variables (empty when valid)
        """
        required = required or list(CREDENTIAL_KEYS)
        missing = [name for name in required if not getattr(self, name, None)]
        if missing:
            logger.warning(
                f"Missing environment variables: {missing}",
                extra={"extra_fields": {"missing": missing}},
            )
        return missing

    def get_model_info(self) -> str:
        return f"Groq ({self.FAST_MODEL}) -> OpenAI ({self.QUALITY_MODEL})"

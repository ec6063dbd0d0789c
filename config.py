"""
Configuration management for the Rights Helpline gateway.

Loads environment variables from .env file and provides typed access to configuration.
Backend selection (oracle, incident store, delivery) lives in infra.config.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

logger = logging.getLogger(__name__)


class Config:
    """Configuration class for the gateway."""

    # Server
    PORT = int(os.getenv("PORT", "8000"))

    # Twilio
    TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN", "")
    TWILIO_WHATSAPP_NUMBER = os.getenv("TWILIO_WHATSAPP_NUMBER", "")

    # Oracle
    ORACLE_BACKEND = os.getenv("ORACLE_BACKEND", "gemini")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = ["TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_WHATSAPP_NUMBER"]
        if cls.ORACLE_BACKEND == "gemini":
            required.append("GEMINI_API_KEY")
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            logger.warning(f"Missing required environment variables: {', '.join(missing)}")
            return False

        return True

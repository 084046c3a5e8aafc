"""
Configuration management for the CHW intake bot.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


def _split_numbers(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    """Configuration class for the CHW intake bot."""

    # WhatsApp Cloud API
    WHATSAPP_VERIFY_TOKEN = os.getenv("WHATSAPP_VERIFY_TOKEN", os.getenv("VERIFY_TOKEN", ""))
    WHATSAPP_ACCESS_TOKEN = os.getenv("WHATSAPP_ACCESS_TOKEN", os.getenv("ACCESS_TOKEN", ""))
    WHATSAPP_PHONE_NUMBER_ID = os.getenv("WHATSAPP_PHONE_NUMBER_ID", os.getenv("WHATSAPP_PHONE_ID", ""))
    WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v20.0")
    WHATSAPP_APP_SECRET = os.getenv("WHATSAPP_APP_SECRET", "")

    # Reminder relay (falls back to the main WhatsApp credentials)
    REMINDER_WHATSAPP_TOKEN = os.getenv("REMINDER_WHATSAPP_TOKEN", "")
    REMINDER_PHONE_NUMBER_ID = os.getenv("REMINDER_PHONE_NUMBER_ID", "")

    # Backend API
    BACKEND_API_BASE = os.getenv("BACKEND_API_BASE", os.getenv("LARAVEL_API_BASE", "http://127.0.0.1:8000/api"))
    BACKEND_API_TOKEN = os.getenv("BACKEND_API_TOKEN", "")

    # Comma-separated sender ids allowed to use the bot, e.g. "254712345678,254700112233"
    AUTHORIZED_NUMBERS = _split_numbers(os.getenv("AUTHORIZED_NUMBERS", ""))

    # Server
    PORT = int(os.getenv("PORT", "3000"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = ["WHATSAPP_VERIFY_TOKEN", "WHATSAPP_ACCESS_TOKEN", "WHATSAPP_PHONE_NUMBER_ID"]
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env file")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Verify Token: {'✓ Set' if Config.WHATSAPP_VERIFY_TOKEN else '✗ Missing'}")
    print(f"  Access Token: {'✓ Set' if Config.WHATSAPP_ACCESS_TOKEN else '✗ Missing'}")
    print(f"  Phone Number ID: {Config.WHATSAPP_PHONE_NUMBER_ID or '✗ Missing'}")
    print(f"  Backend API: {Config.BACKEND_API_BASE}")
    print(f"  Authorized numbers: {len(Config.AUTHORIZED_NUMBERS)}")
    print(f"  Port: {Config.PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")

"""
Shared configuration for both FastAPI and stdlib servers.
"""
import os
import logging
from dotenv import load_dotenv

from .. import __version__

load_dotenv()


class Config:
    """Centralized configuration loaded from environment variables."""

    # Listener
    ECHO_HOST = os.getenv("ECHO_HOST", "127.0.0.1")
    ECHO_PORT = os.getenv("ECHO_PORT", "3000")

    # Reported at /version
    ECHO_VERSION = os.getenv("ECHO_VERSION", __version__)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def get_port(cls) -> int:
        try:
            return int(cls.ECHO_PORT)
        except ValueError:
            raise ValueError(f"ECHO_PORT must be a valid integer, got {cls.ECHO_PORT!r}")

    @classmethod
    def default_addr(cls) -> str:
        """Listen address in host:port form."""
        return f"{cls.ECHO_HOST}:{cls.get_port()}"


def setup_logging():
    """Configure logging based on LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)

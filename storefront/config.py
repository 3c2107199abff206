# storefront/config.py
import logging
import os

from pydantic import BaseModel
from rich.logging import RichHandler


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8085
    admin_username: str = "admin"
    first_product_id: int = 1001
    seed_demo_data: bool = True
    log_level: str = "INFO"
    currency: str = "₹"
    api_url: str = "http://127.0.0.1:8085"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("STOREFRONT_HOST", "127.0.0.1"),
            port=int(os.getenv("STOREFRONT_PORT", "8085")),
            admin_username=os.getenv("STOREFRONT_ADMIN_USERNAME", "admin"),
            first_product_id=int(os.getenv("STOREFRONT_FIRST_PRODUCT_ID", "1001")),
            seed_demo_data=_env_bool("STOREFRONT_SEED_DEMO_DATA", True),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO"),
            currency=os.getenv("STOREFRONT_CURRENCY", "₹"),
            api_url=os.getenv("STOREFRONT_API_URL", "http://127.0.0.1:8085"),
        )


def setup_logging(level: str = "INFO") -> None:
    # rich renders the log lines; safe to call more than once
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(rich_tracebacks=True, show_path=False))
    root.setLevel(level.upper())

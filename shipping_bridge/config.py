"""Process configuration for the shipping bridge."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 8080

# Environment variable -> Settings field.
_REQUIRED = {
    "SHOPIFY_ADMIN_ACCESS_TOKEN": "shopify_access_token",
    "SHOP_DOMAIN": "shop_domain",
    "ARAMEX_ACCOUNT_NUMBER": "aramex_account_number",
    "ARAMEX_ACCOUNT_PIN": "aramex_account_pin",
    "ARAMEX_API_KEY": "aramex_api_key",
    "ARAMEX_API_SECRET": "aramex_api_secret",
    "ARAMEX_ENTITY": "aramex_entity",
    "ARAMEX_COUNTRY_CODE": "aramex_country_code",
    "ARAMEX_BASE_URL": "aramex_base_url",
}


@dataclass(frozen=True)
class Settings:
    """Static credentials and endpoints, read once at startup."""

    shopify_access_token: str
    shop_domain: str
    aramex_account_number: str
    aramex_account_pin: str
    aramex_api_key: str
    aramex_api_secret: str
    aramex_entity: str
    aramex_country_code: str
    aramex_base_url: str
    app_mode: str = ""
    port: int = DEFAULT_PORT

    @property
    def debug(self) -> bool:
        return self.app_mode.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file).

        Raises:
            ValueError: If a required variable is unset or empty, or PORT
                is not an integer.
        """
        missing = [name for name in _REQUIRED if not os.getenv(name)]
        if missing:
            raise ValueError(
                f"{', '.join(missing)} must be set "
                "either in the environment or in a .env file."
            )

        port = os.getenv("PORT") or str(DEFAULT_PORT)
        try:
            port_number = int(port)
        except ValueError as exc:
            raise ValueError(f"Invalid PORT {port!r}") from exc

        values = {field: os.environ[name] for name, field in _REQUIRED.items()}
        return cls(
            **values,
            app_mode=os.getenv("APP_MODE", ""),
            port=port_number,
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

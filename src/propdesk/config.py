"""
Client configuration.

Values come from environment variables (optionally via a .env file in the
working directory):

- PROPDESK_API_URL: REST API base URL (default http://localhost:5000/api/v1)
- PROPDESK_DATA_DIR: where the persisted session lives (default ~/.propdesk)
- PROPDESK_TIMEOUT: request timeout in seconds (default 30)
- PROPDESK_STORAGE_KEY: key of the persisted session slot (default auth-storage)
- PROPDESK_PERSIST_PROFILE_UPDATES: re-persist the user on profile edits
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv(Path.cwd() / ".env")

DEFAULT_API_URL = "http://localhost:5000/api/v1"
API_PREFIX = "/api/v1"
DEFAULT_STORAGE_KEY = "auth-storage"
STORAGE_FILENAME = "storage.json"

DATA_DIR = Path(os.getenv("PROPDESK_DATA_DIR", str(Path.home() / ".propdesk")))


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ClientConfig(BaseModel):
    """Settings shared by the API client, the session store and the CLI."""

    api_url: str = DEFAULT_API_URL
    data_dir: Path = DATA_DIR
    timeout: float = 30.0
    storage_key: str = DEFAULT_STORAGE_KEY
    persist_profile_updates: bool = False

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            api_url=os.getenv("PROPDESK_API_URL") or DEFAULT_API_URL,
            data_dir=Path(
                os.getenv("PROPDESK_DATA_DIR", str(Path.home() / ".propdesk"))
            ),
            timeout=float(os.getenv("PROPDESK_TIMEOUT", "30")),
            storage_key=os.getenv("PROPDESK_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
            persist_profile_updates=_env_bool("PROPDESK_PERSIST_PROFILE_UPDATES"),
        )

    @property
    def storage_path(self) -> Path:
        return self.data_dir / STORAGE_FILENAME

    @property
    def backend_url(self) -> str:
        """
        Server root without the API prefix.

        Plain http is upgraded to https for anything but localhost.
        """
        url = self.api_url.replace(API_PREFIX, "").strip() or "http://localhost:5000"
        if "localhost" not in url and url.startswith("http://"):
            url = "https://" + url[len("http://") :]
        return url.rstrip("/")

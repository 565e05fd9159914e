"""Backend connection settings.

Settings come from ``FOLHA_*`` environment variables first, then from the
``[backend]`` section of an INI file written by ``folha config``.
"""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "folha" / "config.ini"
DEFAULT_API_URL = "http://localhost:5000"
SECTION = "backend"


def normalize_api_url(url: str | None) -> str:
    """Fall back to the local backend and drop trailing slashes."""
    url = (url or "").strip()
    return url.rstrip("/") or DEFAULT_API_URL


@dataclass
class Config:
    """Timesheet backend URL and credentials."""

    api_url: str
    email: str
    password: str

    def __post_init__(self) -> None:
        self.api_url = normalize_api_url(self.api_url)

    @classmethod
    def from_env(cls) -> "Config | None":
        """Build from FOLHA_EMAIL/FOLHA_PASSWORD, or None if either is unset."""
        email = os.environ.get("FOLHA_EMAIL")
        password = os.environ.get("FOLHA_PASSWORD")
        if not email or password is None:
            return None
        return cls(api_url=os.environ.get("FOLHA_API_URL"), email=email, password=password)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config | None":
        """Read the INI file, or None if it does not exist."""
        if not path.is_file():
            return None

        parser = configparser.ConfigParser(interpolation=None)
        parser.read(path, encoding="utf-8")
        backend = parser[SECTION]
        return cls(
            api_url=backend.get("apiUrl"),
            email=backend["email"],
            password=backend["password"],
        )

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Write the INI file, creating its directory."""
        path.parent.mkdir(parents=True, exist_ok=True)
        parser = configparser.ConfigParser(interpolation=None)
        parser[SECTION] = {
            "apiUrl": self.api_url,
            "email": self.email,
            "password": self.password,
        }
        with path.open("w", encoding="utf-8") as config_file:
            parser.write(config_file)

"""Backend session management and data fetching."""

from typing import Self

import requests
from loguru import logger

from folha.errors import InvalidLoginError
from folha.models import TimeRecord
from folha.records import parse_time_records, record_to_payload

DEFAULT_TIMEOUT = 10  # seconds


class ApiSession:
    """Session for interacting with the timesheet backend."""

    def __init__(self, api_url: str, email: str, password: str) -> None:
        self._api_url: str = api_url.rstrip("/")
        self._email: str = email
        self._password: str = password
        self._session: requests.Session | None = None
        self._token: str | None = None

    def __enter__(self) -> Self:
        self._session = requests.Session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session:
            self._session.close()
        self._session = None
        self._token = None

    @property
    def session(self) -> requests.Session:
        """Get the active session."""
        if not self._session:
            msg = "ApiSession should be used as a context manager"
            raise RuntimeError(msg)
        return self._session

    def get_time_records(self) -> list[TimeRecord]:
        """Fetch and normalize all time records of the logged in user."""
        self._ensure_login()
        response = self.session.get(f"{self._api_url}/api/timesheets", timeout=DEFAULT_TIMEOUT)
        response.raise_for_status()
        raw_records = response.json()
        if not isinstance(raw_records, list):
            msg = "Expected a list of time records"
            raise ValueError(msg)
        records = parse_time_records(raw_records)
        logger.debug("Fetched {} time records ({} raw)", len(records), len(raw_records))
        return records

    def create_time_record(self, record: TimeRecord) -> None:
        """Register a new time record."""
        self._ensure_login()
        response = self.session.post(
            f"{self._api_url}/api/timesheets",
            json=record_to_payload(record),
            timeout=DEFAULT_TIMEOUT,
        )
        response.raise_for_status()
        logger.info("Created {} record", record.work_type.value)

    def _ensure_login(self) -> None:
        if self._token is None:
            self._login()

    def _login(self) -> None:
        """Login and attach the bearer token to the session."""
        response = self.session.post(
            f"{self._api_url}/api/auth/login",
            json={"email": self._email, "password": self._password},
            timeout=DEFAULT_TIMEOUT,
        )
        if response.status_code == requests.codes.unauthorized:
            raise InvalidLoginError
        response.raise_for_status()

        token = response.json().get("token")
        if not token:
            raise InvalidLoginError
        self._token = token
        self.session.headers["Authorization"] = f"Bearer {token}"

"""Common interface implemented by every metadata source."""

from __future__ import annotations

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

import requests

from ..config import Settings
from ..records import PreprintRecord
from ..utils.http import polite_user_agent, session_with_retries

logger = logging.getLogger(__name__)


class PreprintSource(ABC):
    """Fetch raw records for the harvest window and map them to ``PreprintRecord``.

    Subclasses implement the count probe, the pagination loop and the
    per-record mapping. ``harvest`` ties them together.
    """

    name: str = ""
    # Removes a trailing version marker from identifiers; None when the
    # source has no versioned identifiers
    version_pattern: Optional[re.Pattern] = None

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    def session(self, settings: Settings) -> requests.Session:
        if self._session is None:
            self._session = session_with_retries(
                user_agent=polite_user_agent(settings.contact_email),
                timeout_sec=settings.timeout_sec,
            )
        return self._session

    def _get(self, settings: Settings, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        logger.debug(f"{self.name} request: {url} {params or ''}")
        resp = self.session(settings).get(url, params=params)
        resp.raise_for_status()
        return resp

    def _pause(self, settings: Settings) -> None:
        if settings.throttle_sec > 0:
            time.sleep(settings.throttle_sec)

    @abstractmethod
    def count(self, settings: Settings) -> Optional[int]:
        """Number of raw records the source reports for the window, if known."""

    @abstractmethod
    def fetch(self, settings: Settings) -> Iterator[Dict[str, Any]]:
        """Yield raw records page by page."""

    @abstractmethod
    def normalize(self, raw: Dict[str, Any], settings: Settings) -> Optional[PreprintRecord]:
        """Map one raw record; None drops it."""

    def harvest(self, settings: Settings) -> List[PreprintRecord]:
        records: List[PreprintRecord] = []
        seen = 0
        for raw in self.fetch(settings):
            seen += 1
            record = self.normalize(raw, settings)
            if record is not None:
                records.append(record)
        logger.info(f"{self.name}: {seen} raw records, {len(records)} normalized")
        return records

"""DataCite adapter: REST API (JSON:API) with cursor pagination.

One pass per configured repository client. Each pass probes ``meta.total``
with an empty page, then follows ``links.next`` until a short or empty page.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from ...config import Settings
from ...errors import SourceError
from ...records import PreprintRecord
from ..base import PreprintSource
from .mapper import map_datacite_to_record

logger = logging.getLogger(__name__)

DATACITE_BASE = "https://api.datacite.org/dois"
MAX_PAGE_SIZE = 1000


def build_query(settings: Settings) -> str:
    terms = " OR ".join(f'"{t}"' for t in settings.search_terms)
    window = f"registered:[{settings.start_date.isoformat()} TO {settings.sample_date.isoformat()}]"
    if not terms:
        return window
    return f"(titles.title:({terms}) OR descriptions.description:({terms})) AND {window}"


class DataCiteSource(PreprintSource):
    name = "datacite"
    # 10.6084/m9.figshare.12033672.v2
    version_pattern = re.compile(r"\.v\d+$", re.IGNORECASE)

    def _params(self, settings: Settings, client: Optional[str], size: int) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "query": build_query(settings),
            "resource-type-id": "text",
            "page[size]": size,
        }
        if client:
            params["client-id"] = client
        return params

    def _clients(self, settings: Settings) -> List[Optional[str]]:
        return list(settings.datacite_clients) or [None]

    def _payload(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            raise SourceError(self.name, "response has no 'data' list")
        return data

    def count(self, settings: Settings) -> Optional[int]:
        total = 0
        for client in self._clients(settings):
            data = self._payload(self._get(settings, DATACITE_BASE, self._params(settings, client, 0)).json())
            total += int((data.get("meta") or {}).get("total") or 0)
        return total

    def _fetch_client(self, settings: Settings, client: Optional[str]) -> Iterator[Dict[str, Any]]:
        size = min(settings.page_size, MAX_PAGE_SIZE)
        params = self._params(settings, client, size)
        params["page[cursor]"] = 1
        url: Optional[str] = DATACITE_BASE
        fetched = 0
        while url:
            data = self._payload(self._get(settings, url, params).json())
            items = data["data"]
            for item in items:
                yield item
            fetched += len(items)
            if not items or len(items) < size:
                break
            # next link already carries every query parameter
            url = (data.get("links") or {}).get("next")
            params = None
            if url:
                self._pause(settings)
        logger.info(f"DataCite client={client or 'all'}: {fetched} records")

    def fetch(self, settings: Settings) -> Iterator[Dict[str, Any]]:
        total = self.count(settings)
        logger.info(f"DataCite reports {total} text records in window")
        for client in self._clients(settings):
            yield from self._fetch_client(settings, client)

    def normalize(self, raw: Dict[str, Any], settings: Settings) -> Optional[PreprintRecord]:
        return map_datacite_to_record(raw)

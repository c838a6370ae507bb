from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, Optional

import feedparser

from ...config import Settings
from ...records import PreprintRecord
from ..base import PreprintSource
from .mapper import map_arxiv_entry

logger = logging.getLogger(__name__)

ARXIV_API = "http://export.arxiv.org/api/query"
# arXiv asks clients to keep pages at or below 2000 results
MAX_RESULTS = 2000


def build_search_query(settings: Settings) -> str:
	fields = " OR ".join(f'ti:"{t}" OR abs:"{t}"' for t in settings.search_terms)
	window = (
		f"submittedDate:[{settings.start_date.strftime('%Y%m%d')}0000 "
		f"TO {settings.sample_date.strftime('%Y%m%d')}2359]"
	)
	return f"({fields}) AND {window}" if fields else window


class ArxivSource(PreprintSource):
	name = "arxiv"
	version_pattern = re.compile(r"v\d+$")

	def _page(self, settings: Settings, start: int, size: int):
		params = {
			"search_query": build_search_query(settings),
			"start": start,
			"max_results": size,
			"sortBy": "submittedDate",
			"sortOrder": "ascending",
		}
		resp = self._get(settings, ARXIV_API, params)
		return feedparser.parse(resp.text)

	def count(self, settings: Settings) -> Optional[int]:
		feed = self._page(settings, 0, 0)
		total = feed.feed.get("opensearch_totalresults")
		return int(total) if total is not None else None

	def fetch(self, settings: Settings) -> Iterator[Dict[str, Any]]:
		size = min(settings.page_size, MAX_RESULTS)
		total = self.count(settings)
		logger.info(f"arXiv reports {total} matching submissions in window")
		start = 0
		while total is None or start < total:
			self._pause(settings)
			feed = self._page(settings, start, size)
			entries = feed.entries
			for entry in entries:
				yield entry
			start += len(entries)
			if not entries or len(entries) < size:
				break
		logger.info(f"arXiv fetch complete: {start} records")

	def normalize(self, raw: Dict[str, Any], settings: Settings) -> Optional[PreprintRecord]:
		return map_arxiv_entry(raw)

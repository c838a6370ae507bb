"""Shared HTTP session for the metadata APIs: retries on 429/5xx, a default
timeout and a User-Agent that names the harvester."""

from __future__ import annotations

from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from ..constants import DEFAULT_UA, DEFAULT_TIMEOUT_SEC, MAX_RETRIES

RETRY_STATUSES = (429, 500, 502, 503, 504)


def build_retry(total: int = MAX_RETRIES) -> Retry:
	# Crossref and DataCite answer 429 with Retry-After when over their rate limit
	return Retry(
		total=total,
		backoff_factor=0.5,
		status_forcelist=RETRY_STATUSES,
		allowed_methods=frozenset(["GET"]),
		respect_retry_after_header=True,
	)


class HarvestAdapter(HTTPAdapter):
	"""Retrying adapter that fills in ``timeout`` when a request omits it."""

	def __init__(self, timeout_sec: float = DEFAULT_TIMEOUT_SEC, retries: int = MAX_RETRIES) -> None:
		self.timeout_sec = timeout_sec
		super().__init__(max_retries=build_retry(retries))

	def send(self, request, **kwargs):
		if kwargs.get("timeout") is None:
			kwargs["timeout"] = self.timeout_sec
		return super().send(request, **kwargs)


def polite_user_agent(contact_email: Optional[str] = None) -> str:
	"""Crossref and DataCite route requests carrying a mailto to their polite pool."""
	if contact_email:
		return f"{DEFAULT_UA} (mailto:{contact_email})"
	return DEFAULT_UA


def session_with_retries(user_agent: Optional[str] = None, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> requests.Session:
	session = requests.Session()
	adapter = HarvestAdapter(timeout_sec=timeout_sec)
	session.mount("http://", adapter)
	session.mount("https://", adapter)
	session.headers.update({"User-Agent": user_agent or DEFAULT_UA})
	return session

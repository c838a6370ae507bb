"""Recover SSRN posting dates from the SSRN landing page.

One GET per record, serially. Any failure (HTTP error, unexpected markup,
unparseable date) yields ``None``.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

SSRN_ABSTRACT_URL = "https://papers.ssrn.com/sol3/papers.cfm"

_SSRN_ID_RE = re.compile(r"ssrn\.(\d+)$", re.IGNORECASE)
_POSTED_RE = re.compile(r"Posted:\s*(\d{1,2}\s+\w{3}\s+\d{4})")


def ssrn_abstract_id(doi: str) -> Optional[str]:
    m = _SSRN_ID_RE.search(doi.strip())
    return m.group(1) if m else None


def parse_ssrn_posted_date(html: str) -> Optional[date]:
    soup = BeautifulSoup(html, "lxml")

    meta = soup.find("meta", {"name": "citation_online_date"})
    if meta and meta.get("content"):
        try:
            return datetime.strptime(meta["content"].strip(), "%Y/%m/%d").date()
        except ValueError:
            pass

    m = _POSTED_RE.search(soup.get_text(" "))
    if m:
        try:
            return datetime.strptime(m.group(1), "%d %b %Y").date()
        except ValueError:
            return None
    return None


def fetch_ssrn_posted_date(session: requests.Session, doi: str) -> Optional[date]:
    abstract_id = ssrn_abstract_id(doi)
    if abstract_id is None:
        return None
    try:
        resp = session.get(SSRN_ABSTRACT_URL, params={"abstract_id": abstract_id})
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"SSRN landing page failed for {doi}: {e}")
        return None
    return parse_ssrn_posted_date(resp.text)

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional
import xml.etree.ElementTree as ET

from ...config import Settings
from ...errors import SourceError
from ...records import PreprintRecord
from ..base import PreprintSource
from .mapper import map_repec_record

logger = logging.getLogger(__name__)

REPEC_OAI_BASE = "http://oai.repec.org"

NS = {
	"oai": "http://www.openarchives.org/OAI/2.0/",
	"oai_dc": "http://www.openarchives.org/OAI/2.0/oai_dc/",
	"dc": "http://purl.org/dc/elements/1.1/",
}


def _handle(identifiers: List[str], header_id: Optional[str]) -> Optional[str]:
	for ident in identifiers:
		if ident.startswith("RePEc:"):
			return ident
	# header identifiers look like oai:RePEc:nbr:nberwo:26867
	if header_id and "RePEc:" in header_id:
		return header_id[header_id.index("RePEc:"):]
	return None


def parse_oai_record(record_el: ET.Element) -> Dict[str, Any]:
	header = record_el.find("oai:header", NS)
	if header is not None and header.get("status") == "deleted":
		return {}
	metadata = record_el.find("oai:metadata", NS)
	if metadata is None:
		return {}
	dc = metadata.find("oai_dc:dc", NS)
	if dc is None:
		return {}

	get_all = lambda tag: [el.text.strip() for el in dc.findall(f"dc:{tag}", NS) if (el.text or "").strip()]

	header_id = header.findtext("oai:identifier", default=None, namespaces=NS) if header is not None else None
	datestamp = header.findtext("oai:datestamp", default=None, namespaces=NS) if header is not None else None
	titles = get_all("title")
	descriptions = get_all("description")
	dates = get_all("date")
	return {
		"handle": _handle(get_all("identifier"), header_id),
		"title": titles[0] if titles else None,
		"abstract": descriptions[0] if descriptions else None,
		"date": dates[0] if dates else None,
		"datestamp": datestamp,
	}


class RepecSource(PreprintSource):
	name = "repec"
	# RePEc handles are not versioned
	version_pattern = None

	def _list_records(self, settings: Settings, set_spec: Optional[str], token: Optional[str]) -> ET.Element:
		params = {"verb": "ListRecords"}
		if token:
			params["resumptionToken"] = token
		else:
			params["metadataPrefix"] = "oai_dc"
			params["from"] = settings.start_date.isoformat()
			params["until"] = settings.sample_date.isoformat()
			if set_spec:
				params["set"] = set_spec
		resp = self._get(settings, REPEC_OAI_BASE, params)
		try:
			root = ET.fromstring(resp.content)
		except ET.ParseError as e:
			raise SourceError(self.name, f"invalid OAI-PMH XML: {e}")
		error = root.find("oai:error", NS)
		if error is not None and error.get("code") != "noRecordsMatch":
			raise SourceError(self.name, f"OAI-PMH error {error.get('code')}: {(error.text or '').strip()}")
		return root

	def _sets(self, settings: Settings) -> List[Optional[str]]:
		return list(settings.repec_sets) or [None]

	def count(self, settings: Settings) -> Optional[int]:
		total = 0
		for set_spec in self._sets(settings):
			root = self._list_records(settings, set_spec, None)
			tok_el = root.find(".//oai:resumptionToken", NS)
			if tok_el is not None and tok_el.get("completeListSize"):
				total += int(tok_el.get("completeListSize"))
			elif tok_el is None or not (tok_el.text or "").strip():
				# single page: the records on it are the whole list
				total += len(root.findall(".//oai:record", NS))
			else:
				return None
		return total

	def _fetch_set(self, settings: Settings, set_spec: Optional[str]) -> Iterator[Dict[str, Any]]:
		token: Optional[str] = None
		pages = 0
		fetched = 0
		while True:
			root = self._list_records(settings, set_spec, token)
			pages += 1
			records = root.findall(".//oai:record", NS)
			for rec in records:
				obj = parse_oai_record(rec)
				if obj:
					fetched += 1
					yield obj
			tok_el = root.find(".//oai:resumptionToken", NS)
			token = tok_el.text.strip() if (tok_el is not None and (tok_el.text or "").strip()) else None
			if not records or not token:
				break
			self._pause(settings)
		logger.info(f"RePEc set={set_spec or 'all'}: {fetched} records in {pages} pages")

	def fetch(self, settings: Settings) -> Iterator[Dict[str, Any]]:
		total = self.count(settings)
		logger.info(f"RePEc reports {total} records in window")
		for set_spec in self._sets(settings):
			yield from self._fetch_set(settings, set_spec)

	def normalize(self, raw: Dict[str, Any], settings: Settings) -> Optional[PreprintRecord]:
		return map_repec_record(raw)

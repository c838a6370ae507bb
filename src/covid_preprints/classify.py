"""Map publisher/institution/client strings to canonical repository names.

Each table is an ordered list of ``Rule`` entries. ``classify`` walks the list
and returns the label of the first rule whose field equals the rule value.
Records that match no rule are not preprints we track and get dropped by the
caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    field: str
    value: str
    label: str

    def matches(self, fields: Mapping[str, Optional[str]]) -> bool:
        actual = fields.get(self.field)
        return actual is not None and actual.strip() == self.value


def _osf(group_title: str, label: Optional[str] = None) -> Rule:
    return Rule("group_title", group_title, label or f"{group_title} (OSF)")


CROSSREF_RULES: Sequence[Rule] = (
    Rule("institution", "bioRxiv", "bioRxiv"),
    Rule("institution", "medRxiv", "medRxiv"),
    Rule("publisher", "Research Square", "Research Square"),
    Rule("publisher", "Research Square Platform LLC", "Research Square"),
    Rule("publisher", "MDPI AG", "Preprints.org"),
    Rule("publisher", "American Chemical Society (ACS)", "ChemRxiv"),
    Rule("publisher", "JMIR Publications Inc.", "JMIR"),
    Rule("publisher", "WHO Press", "WHO"),
    Rule("publisher", "ScienceOpen", "ScienceOpen"),
    Rule("publisher", "SAGE Publications", "SAGE"),
    Rule("publisher", "FapUNIFESP (SciELO)", "SciELO"),
    Rule("publisher", "Institute of Electrical and Electronics Engineers (IEEE)", "Techrxiv (IEEE)"),
    Rule("publisher", "Authorea, Inc.", "Authorea"),
    Rule("publisher", "Elsevier BV", "SSRN"),
    Rule("publisher", "Cambridge University Press (CUP)", "Cambridge Open Engage"),
    Rule("publisher", "Copernicus GmbH", "Copernicus"),
    _osf("AfricArXiv"),
    _osf("EarthArXiv"),
    _osf("EcoEvoRxiv"),
    _osf("EdArXiv"),
    _osf("engrXiv"),
    _osf("Frenxiv"),
    _osf("INA-Rxiv"),
    _osf("IndiaRxiv"),
    _osf("LawArXiv"),
    _osf("MediArXiv"),
    _osf("MetaArXiv"),
    _osf("MindRxiv"),
    _osf("NutriXiv"),
    _osf("PaleorXiv"),
    _osf("PsyArXiv"),
    _osf("SocArXiv"),
    _osf("SportRxiv"),
    _osf("Open Science Framework", "OSF Preprints"),
)

DATACITE_RULES: Sequence[Rule] = (
    Rule("client", "cern.zenodo", "Zenodo"),
    Rule("client", "figshare.ars", "Figshare"),
    Rule("client", "rg.rg", "ResearchGate"),
    Rule("client", "tib.osf", "OSF Preprints"),
    Rule("client", "psyarxiv.psyarxiv", "PsyArXiv (OSF)"),
)

# Keyed on the "RePEc:<archive>" prefix of the handle
REPEC_RULES: Sequence[Rule] = (
    Rule("archive", "RePEc:nbr", "NBER"),
    Rule("archive", "RePEc:cpr", "CEPR"),
    Rule("archive", "RePEc:iza", "IZA"),
    Rule("archive", "RePEc:ces", "CESifo"),
    Rule("archive", "RePEc:fip", "Federal Reserve"),
    Rule("archive", "RePEc:cfm", "CfM (LSE)"),
    Rule("archive", "RePEc:osf", "OSF Preprints"),
)

REPEC_DEFAULT = "RePEc"


def classify(fields: Mapping[str, Optional[str]], rules: Sequence[Rule]) -> Optional[str]:
    for rule in rules:
        if rule.matches(fields):
            return rule.label
    return None


def classify_repec(handle: str) -> str:
    """RePEc handles are always kept; known archives get their own label."""
    parts = handle.split(":")
    archive = ":".join(parts[:2]) if len(parts) >= 2 else handle
    return classify({"archive": archive}, REPEC_RULES) or REPEC_DEFAULT

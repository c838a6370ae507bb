from __future__ import annotations

from datetime import date

DEFAULT_UA = "covid-preprints/0.1"
DEFAULT_TIMEOUT_SEC = 30
MAX_RETRIES = 3

# Harvest window always opens on the first day of 2020
START_DATE = date(2020, 1, 1)

SEARCH_PATTERN = r"coronavirus|covid-19|sars-cov|ncov-2019|2019-ncov|hcov-19|sars-2"

# Sources with fewer records are grouped as "Other" in reports
OTHER_THRESHOLD = 50

DATASET_FILENAME = "covid19_preprints.csv"
METADATA_FILENAME = "covid19_preprints.json"

DATASET_COLUMNS = ["source", "identifier", "identifier_type", "posted_date", "title", "abstract"]

SOURCE_NAMES = ("crossref", "datacite", "arxiv", "repec")

# Server-side query terms for sources that support full-text search
SEARCH_TERMS = ["coronavirus", "covid-19", "sars-cov", "ncov-2019", "2019-ncov", "hcov-19", "sars-2"]

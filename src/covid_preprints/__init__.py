"""Harvest, normalize and de-duplicate COVID-19 preprint metadata.

Records are collected from Crossref, DataCite, arXiv and RePEc, mapped onto a
single schema and written as one flat dataset with a small JSON sidecar.
"""

__version__ = "0.1.0"

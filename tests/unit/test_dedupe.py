import re
from datetime import date

from covid_preprints.dedupe import collapse_titles, collapse_versions, deduplicate, strip_version
from covid_preprints.records import IdentifierType
from covid_preprints.sources import ArxivSource, CrossrefSource, DataCiteSource, RepecSource
from tests.factories import make_record


def test_version_suffixes_collapse_to_earliest_posted() -> None:
    v1 = make_record(identifier="10.20944/x.v1", posted=date(2020, 3, 1), title="Coronavirus A")
    v2 = make_record(identifier="10.20944/x.v2", posted=date(2020, 3, 10), title="Coronavirus A (revised)")
    result = deduplicate([v2, v1], CrossrefSource.version_pattern)
    assert result == [v1]


def test_strip_version_per_source() -> None:
    assert strip_version("10.20944/preprints202003.0001.v2", CrossrefSource.version_pattern) == "10.20944/preprints202003.0001"
    assert strip_version("10.21203/rs.3.rs-16682/v1", CrossrefSource.version_pattern) == "10.21203/rs.3.rs-16682"
    assert strip_version("2003.12345v3", ArxivSource.version_pattern) == "2003.12345"
    assert strip_version("10.6084/m9.figshare.12033672.v2", DataCiteSource.version_pattern) == "10.6084/m9.figshare.12033672"
    assert strip_version("RePEc:nbr:nberwo:26867", RepecSource.version_pattern) == "RePEc:nbr:nberwo:26867"


def test_biorxiv_dois_are_not_mistaken_for_versions() -> None:
    assert strip_version("10.1101/2020.03.01.000001", CrossrefSource.version_pattern) == "10.1101/2020.03.01.000001"


def test_osf_guids_are_not_mistaken_for_versions() -> None:
    pattern = CrossrefSource.version_pattern
    assert strip_version("10.31234/osf.io/v2345", pattern) == "10.31234/osf.io/v2345"
    a = make_record(identifier="10.31234/osf.io/v2345", source="PsyArXiv (OSF)", posted=date(2020, 4, 1), title="COVID-19 anxiety")
    b = make_record(identifier="10.31234/osf.io/v6789", source="PsyArXiv (OSF)", posted=date(2020, 4, 3), title="COVID-19 lockdown mood")
    assert deduplicate([a, b], pattern) == [a, b]


def test_same_title_same_source_keeps_earliest() -> None:
    early = make_record(identifier="10.1/a", posted=date(2020, 2, 1))
    late = make_record(identifier="10.1/b", posted=date(2020, 2, 5))
    assert collapse_titles([late, early]) == [early]


def test_same_title_different_source_is_kept() -> None:
    a = make_record(identifier="10.1/a", source="bioRxiv")
    b = make_record(identifier="10.1/b", source="medRxiv")
    assert collapse_titles([a, b]) == [a, b]


def test_equal_dates_keep_first_seen() -> None:
    first = make_record(identifier="2003.1v1", identifier_type=IdentifierType.ARXIV, title="COVID-19 one")
    second = make_record(identifier="2003.1v2", identifier_type=IdentifierType.ARXIV, title="COVID-19 two")
    assert collapse_versions([first, second], re.compile(r"v\d+$")) == [first]
    assert collapse_versions([second, first], re.compile(r"v\d+$")) == [second]


def test_deduplicated_batch_has_unique_stripped_ids_and_titles() -> None:
    pattern = CrossrefSource.version_pattern
    records = [
        make_record(identifier="10.20944/x.v1", posted=date(2020, 3, 2), title="Covid-19 T1"),
        make_record(identifier="10.20944/x.v2", posted=date(2020, 3, 1), title="Covid-19 T1"),
        make_record(identifier="10.20944/y.v1", posted=date(2020, 3, 4), title="Covid-19 T1"),
        make_record(identifier="10.20944/z.v1", posted=date(2020, 3, 4), title="Covid-19 T2"),
    ]
    result = deduplicate(records, pattern)
    stripped = [strip_version(r.identifier, pattern) for r in result]
    assert len(stripped) == len(set(stripped))
    assert len({(r.source, r.title) for r in result}) == len(result)
    assert {r.identifier for r in result} == {"10.20944/x.v2", "10.20944/z.v1"}

from datetime import date

from covid_preprints.constants import SEARCH_PATTERN
from covid_preprints.filters import compile_topic_pattern, filter_topic, matches_topic, within_window
from tests.factories import make_record

PATTERN = compile_topic_pattern(SEARCH_PATTERN)


def test_title_match_without_abstract_passes() -> None:
    record = make_record(title="Novel coronavirus outbreak", abstract=None)
    assert matches_topic(record, PATTERN)


def test_abstract_match_is_enough() -> None:
    record = make_record(title="Hospital capacity planning", abstract="We model COVID-19 admissions.")
    assert matches_topic(record, PATTERN)


def test_match_is_case_insensitive() -> None:
    record = make_record(title="Spread of SARS-COV-2 in care homes")
    assert matches_topic(record, PATTERN)


def test_unrelated_record_is_filtered_out() -> None:
    unrelated = make_record(title="Deep learning for protein folding", abstract="No viruses here.")
    related = make_record(identifier="10.1/y", title="2019-nCoV genome")
    assert list(filter_topic([unrelated, related], PATTERN)) == [related]


def test_window_is_inclusive() -> None:
    start, end = date(2020, 1, 1), date(2020, 6, 30)
    assert within_window(make_record(posted=start), start, end)
    assert within_window(make_record(posted=end), start, end)
    assert not within_window(make_record(posted=date(2019, 12, 31)), start, end)
    assert not within_window(make_record(posted=date(2020, 7, 1)), start, end)

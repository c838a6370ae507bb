import json
from datetime import date

from covid_preprints.export import export, read_dataset, write_dataset, write_metadata
from covid_preprints.records import IdentifierType
from covid_preprints.store import create_sqlite_engine, load_records
from tests.factories import make_record

RECORDS = [
    make_record(identifier="10.1101/2020.03.01.000001", abstract='Quotes "inside", commas, and\nnewlines'),
    make_record(identifier="2003.12345v1", source="arXiv", identifier_type=IdentifierType.ARXIV, posted=date(2020, 3, 2), title="Covid-19 model"),
    make_record(identifier="RePEc:nbr:nberwo:26867", source="NBER", identifier_type=IdentifierType.REPEC, posted=date(2020, 4, 1), title="COVID economics", abstract=None),
]


def test_dataset_round_trip(tmp_path) -> None:
    path = tmp_path / "dataset.csv"
    assert write_dataset(RECORDS, path) == 3
    assert set(read_dataset(path)) == set(RECORDS)


def test_dataset_header(tmp_path) -> None:
    path = tmp_path / "dataset.csv"
    write_dataset(RECORDS, path)
    header = path.read_text(encoding="utf-8").splitlines()[0]
    assert header == "source,identifier,identifier_type,posted_date,title,abstract"


def test_metadata_sidecar(tmp_path, settings) -> None:
    path = tmp_path / "meta.json"
    write_metadata(path, settings)
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "release_date": "2020-07-05",
        "sample_date": "2020-06-30",
        "url": "https://example.org/covid19-preprints",
    }


def test_export_writes_all_artifacts(settings, tmp_path) -> None:
    settings.database = tmp_path / "out" / "preprints.sqlite"
    paths = export(RECORDS, settings)
    assert paths["dataset"].exists()
    assert paths["metadata"].exists()

    engine, SessionLocal = create_sqlite_engine(paths["database"])
    session = SessionLocal()
    try:
        assert set(load_records(session)) == set(RECORDS)
    finally:
        session.close()


def test_database_is_rewritten_on_each_export(settings, tmp_path) -> None:
    settings.database = tmp_path / "preprints.sqlite"
    export(RECORDS, settings)
    export(RECORDS[:1], settings)
    engine, SessionLocal = create_sqlite_engine(settings.database)
    session = SessionLocal()
    try:
        assert load_records(session) == RECORDS[:1]
    finally:
        session.close()

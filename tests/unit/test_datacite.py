from datetime import date

from covid_preprints.sources.datacite import DataCiteSource, map_datacite_to_record
from covid_preprints.sources.datacite.adapter import build_query
from covid_preprints.sources.datacite.mapper import parse_iso_date
from tests.factories import mock_response, mock_session


def _resource(doi="10.5281/zenodo.1", client="cern.zenodo", **attrs):
    attributes = {
        "doi": doi,
        "titles": [{"title": "COVID-19  mobility\ndata"}],
        "descriptions": [
            {"description": "Funding info", "descriptionType": "Other"},
            {"description": "Mobility during the coronavirus lockdown.", "descriptionType": "Abstract"},
        ],
        "registered": "2020-04-02T10:22:31.000Z",
        "created": "2020-04-01T09:00:00.000Z",
    }
    attributes.update(attrs)
    return {
        "id": doi,
        "type": "dois",
        "attributes": attributes,
        "relationships": {"client": {"data": {"id": client, "type": "clients"}}},
    }


def test_parse_iso_date() -> None:
    assert parse_iso_date("2020-04-02T10:22:31.000Z") == date(2020, 4, 2)
    assert parse_iso_date("2020-04-02") == date(2020, 4, 2)
    assert parse_iso_date("April 2020") is None
    assert parse_iso_date(None) is None


def test_map_resource_to_record() -> None:
    record = map_datacite_to_record(_resource(doi="10.5281/ZENODO.1"))
    assert record.source == "Zenodo"
    assert record.identifier == "10.5281/zenodo.1"
    assert record.posted_date == date(2020, 4, 2)
    assert record.title == "COVID-19 mobility data"
    assert record.abstract == "Mobility during the coronavirus lockdown."


def test_registered_falls_back_to_created() -> None:
    record = map_datacite_to_record(_resource(registered=None))
    assert record.posted_date == date(2020, 4, 1)


def test_missing_descriptions_give_null_abstract() -> None:
    assert map_datacite_to_record(_resource(descriptions=None)).abstract is None


def test_unknown_client_is_dropped() -> None:
    assert map_datacite_to_record(_resource(client="some.repo")) is None


def test_build_query_contains_window_and_terms(settings) -> None:
    query = build_query(settings)
    assert "registered:[2020-01-01 TO 2020-06-30]" in query
    assert '"covid-19"' in query


def test_fetch_follows_next_links_per_client(settings) -> None:
    settings.datacite_clients = ["cern.zenodo"]
    count = mock_response({"data": [], "meta": {"total": 3}})
    page1 = mock_response({
        "data": [_resource("10.5281/zenodo.1"), _resource("10.5281/zenodo.2")],
        "links": {"next": "https://api.datacite.org/dois?page%5Bcursor%5D=abc"},
    })
    page2 = mock_response({"data": [_resource("10.5281/zenodo.3")], "links": {}})
    session = mock_session([count, page1, page2])

    items = list(DataCiteSource(session=session).fetch(settings))

    assert [i["id"] for i in items] == ["10.5281/zenodo.1", "10.5281/zenodo.2", "10.5281/zenodo.3"]
    first_page = session.get.call_args_list[1]
    assert first_page.kwargs["params"]["client-id"] == "cern.zenodo"
    assert first_page.kwargs["params"]["page[cursor]"] == 1
    next_page = session.get.call_args_list[2]
    assert next_page.args[0] == "https://api.datacite.org/dois?page%5Bcursor%5D=abc"
    assert next_page.kwargs["params"] is None


def test_count_sums_clients(settings) -> None:
    settings.datacite_clients = ["cern.zenodo", "figshare.ars"]
    session = mock_session([
        mock_response({"data": [], "meta": {"total": 5}}),
        mock_response({"data": [], "meta": {"total": 7}}),
    ])
    assert DataCiteSource(session=session).count(settings) == 12

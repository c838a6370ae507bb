from covid_preprints.classify import (
    CROSSREF_RULES,
    DATACITE_RULES,
    REPEC_DEFAULT,
    Rule,
    classify,
    classify_repec,
)


def test_mdpi_publisher_without_other_fields_is_preprints_org() -> None:
    fields = {"institution": None, "publisher": "MDPI AG", "group_title": None}
    assert classify(fields, CROSSREF_RULES) == "Preprints.org"


def test_institution_rule_takes_priority_over_publisher() -> None:
    fields = {"institution": "medRxiv", "publisher": "Cold Spring Harbor Laboratory", "group_title": None}
    assert classify(fields, CROSSREF_RULES) == "medRxiv"


def test_osf_group_titles_are_labelled_with_osf_suffix() -> None:
    fields = {"institution": None, "publisher": "Center for Open Science", "group_title": "PsyArXiv"}
    assert classify(fields, CROSSREF_RULES) == "PsyArXiv (OSF)"


def test_unknown_publisher_is_unclassified() -> None:
    fields = {"institution": None, "publisher": "Some Journal Press", "group_title": None}
    assert classify(fields, CROSSREF_RULES) is None


def test_first_matching_rule_wins() -> None:
    rules = [Rule("publisher", "X", "first"), Rule("publisher", "X", "second")]
    assert classify({"publisher": "X"}, rules) == "first"


def test_rule_value_is_compared_after_stripping_whitespace() -> None:
    assert classify({"publisher": " MDPI AG "}, CROSSREF_RULES) == "Preprints.org"


def test_datacite_client_rules() -> None:
    assert classify({"client": "cern.zenodo"}, DATACITE_RULES) == "Zenodo"
    assert classify({"client": "figshare.ars"}, DATACITE_RULES) == "Figshare"
    assert classify({"client": "unknown.client"}, DATACITE_RULES) is None


def test_repec_known_archive_and_default() -> None:
    assert classify_repec("RePEc:nbr:nberwo:26867") == "NBER"
    assert classify_repec("RePEc:abc:wpaper:1") == REPEC_DEFAULT

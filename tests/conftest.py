from __future__ import annotations

from datetime import date

import pytest

from covid_preprints.config import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        sample_date=date(2020, 6, 30),
        release_date=date(2020, 7, 5),
        output_dir=tmp_path / "out",
        throttle_sec=0,
        page_size=2,
        resolve_ssrn_dates=False,
        source_url="https://example.org/covid19-preprints",
    )

"""Shared fixtures: institution factory and the bundled dataset."""

import pytest

from src.data.institutions import get_institutions
from src.data.models import Coordinates, Institution


@pytest.fixture
def make_institution():
    """Factory building an Institution with sensible defaults for any field not given."""

    def _make(inst_id="test", **overrides):
        values = dict(
            id=inst_id,
            name=f"{inst_id.title()} University",
            short_name=inst_id.title(),
            state="MI",
            city="Ann Arbor",
            coordinates=Coordinates(42.0, -83.0),
            institution_type="public",
            carnegie_classification="Master's Colleges & Universities: Larger Programs",
            total_enrollment=10000,
            has_wac_program=True,
            has_writing_center=True,
        )
        values.update(overrides)
        return Institution(**values)

    return _make


@pytest.fixture(scope="session")
def dataset():
    return get_institutions()

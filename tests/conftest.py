import io

import pytest

import levelog


@pytest.fixture
def buf():
    """Send the default logger's records to an in-memory sink for one test."""
    out = io.BytesIO()
    levelog.configure(levelog.Options(output=out))
    yield out
    levelog.reset()

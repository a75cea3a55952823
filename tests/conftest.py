"""Shared test fixtures."""

from pathlib import Path

import pytest

from prospects.reader import read_csv


FIXTURES_DIR = Path(__file__).resolve().parent / 'fixtures'


@pytest.fixture(scope='session')
def fixtures_dir() -> Path:
    """Path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def fantrax_players():
    """All players from sample-fantrax.csv."""
    return read_csv(FIXTURES_DIR / 'sample-fantrax.csv')


@pytest.fixture
def ibw_players():
    """All players from sample-ibw.csv (with header row)."""
    return read_csv(FIXTURES_DIR / 'sample-ibw.csv')

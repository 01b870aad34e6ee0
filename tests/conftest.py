"""
Pytest configuration and shared fixtures
"""

import pytest

from contribstats.core.models import Contribution


@pytest.fixture
def contributions():
    """Raw contributions across two categories"""
    return [
        Contribution("Team A", "Engineering", 10),
        Contribution("Team B", "Engineering", 42),
        Contribution("Team C", "Marketing", 30),
        Contribution("Team D", "Marketing", 5),
    ]


@pytest.fixture
def mixed_max_rows():
    """Grouped MAX rows with one of each kind of problem"""
    return [
        {"category": "Engineering", "maxValue": 100},
        {"category": None, "maxValue": 50},
        {"category": "Marketing", "maxValue": None},
        {"category": "Sales", "maxValue": "invalid"},
        {"category": "Operations", "maxValue": 60},
    ]


@pytest.fixture
def contributions_csv(tmp_path):
    """CSV file of raw contributions, including blank and text values"""
    csv_file = tmp_path / "contributions.csv"
    csv_file.write_text(
        "team_name,category,value\n"
        "Team A,Engineering,10\n"
        "Team B,Engineering,42\n"
        "Team C,Marketing,30\n"
        "Team D,Marketing,5\n"
        "Team E,Sales,\n"
        "Team F,,7\n"
    )
    return csv_file

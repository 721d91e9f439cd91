"""
Pytest configuration and fixtures
"""

import json
from datetime import datetime
from unittest.mock import Mock

import pytest

from zenwidget.config.models import DisplayGroup, Item, SortPolicy, Theme, WidgetConfig


@pytest.fixture
def sample_config():
    """Sample launcher configuration in its stored JSON form"""
    return {
        "items": [
            {"name": "Settings", "target": "App-prefs://", "displayGroup": "left"},
            {"name": "Maps", "target": "maps://", "displayGroup": "left"},
            {
                "name": "Standup",
                "target": "zoommtg://standup",
                "displayGroup": "center",
                "startTime": "09:00",
                "endTime": "10:00",
                "startDay": 1,
                "endDay": 5,
            },
            {
                "name": "Shazam",
                "target": "shortcuts://run-shortcut?name=Shazam",
                "displayGroup": "right",
            },
        ],
        "sortPolicy": "manual",
    }


@pytest.fixture
def home(tmp_path):
    """Empty zenwidget home directory"""
    path = tmp_path / "zenwidget"
    path.mkdir()
    return path


@pytest.fixture
def write_json(home):
    """Write a JSON document into the home directory"""

    def _write(name, data):
        path = home / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def populated_home(home, write_json, sample_config):
    """Home directory with a configuration, usage counts and a theme"""
    write_json("config.json", sample_config)
    write_json("stats.json", {"Settings": 2, "Maps": 8, "Shazam": 4})
    write_json("theme.json", {"backgroundColor": "101010", "minFontSize": 10, "maxFontSize": 30})
    return home


@pytest.fixture
def monday_morning():
    """Monday 2024-01-15 09:30"""
    return datetime(2024, 1, 15, 9, 30)


@pytest.fixture
def abc_items():
    return [
        Item("A", "a://", DisplayGroup.LEFT),
        Item("B", "b://", DisplayGroup.LEFT),
        Item("C", "c://", DisplayGroup.RIGHT),
    ]


@pytest.fixture
def abc_config(abc_items):
    return WidgetConfig(items=tuple(abc_items), sort_policy=SortPolicy.USAGE)


@pytest.fixture
def theme():
    return Theme(min_font_size=8, max_font_size=36)


@pytest.fixture(autouse=True)
def no_subprocess_calls(monkeypatch):
    """Prevent actual subprocess calls during testing"""
    mock_popen = Mock()
    mock_popen.returncode = 0
    monkeypatch.setattr("subprocess.Popen", Mock(return_value=mock_popen))
    monkeypatch.setattr("subprocess.run", Mock(return_value=Mock(returncode=0)))


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.zenwidget"""
    monkeypatch.setenv("ZENWIDGET_HOME", str(tmp_path / "default-home"))

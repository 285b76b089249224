import logging

import pytest

from tetherio import constants
from tetherio.utils.logger import (
    _apply_module_levels,
    _normalize_module_name,
    parse_module_levels,
)


@pytest.fixture
def restore_levels():
    names = ["tetherio.io", "tetherio.io.backends", "tetherio.config"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestParseModuleLevels:

    def test_pairs(self):
        assert parse_module_levels("io=debug, cli=INFO") == {"io": "DEBUG", "cli": "INFO"}

    @pytest.mark.parametrize("spec", [None, "", "garbage", ",,"])
    def test_nothing_to_parse(self, spec):
        assert parse_module_levels(spec) == {}


class TestNormalizeModuleName:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("be", "tetherio.io.backends"),
            ("sync", "tetherio.io.transport"),
            ("io.stream", "tetherio.io.stream"),
            ("config.*", "tetherio.config"),
            ("tetherio.tools", "tetherio.tools"),
            ("fsspec", "fsspec"),
        ],
    )
    def test_normalize(self, name, expected):
        assert _normalize_module_name(name) == expected


class TestApplyModuleLevels:

    def test_mapping(self, restore_levels):
        _apply_module_levels({"be": "WARNING", "conf": "error"})
        assert logging.getLogger("tetherio.io.backends").level == logging.WARNING
        assert logging.getLogger("tetherio.config").level == logging.ERROR

    def test_environment(self, restore_levels, monkeypatch):
        monkeypatch.setenv(constants.LOG_LEVELS_ENV, "io=DEBUG")
        _apply_module_levels(None)
        assert logging.getLogger("tetherio.io").level == logging.DEBUG

    def test_unknown_level_is_ignored(self, restore_levels, caplog):
        before = logging.getLogger("tetherio.io").level
        with caplog.at_level(logging.WARNING):
            _apply_module_levels({"io": "LOUD"})
        assert logging.getLogger("tetherio.io").level == before
        assert "Ignoring unknown log level 'LOUD'" in caplog.text

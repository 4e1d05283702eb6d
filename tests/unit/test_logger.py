import json
import logging
from pathlib import Path

import pytest

from locator_resolver.selectors.loader import load_selectors_file, register_selectors
from locator_resolver.utils.logger import JsonLinesFormatter, get_logger, log_with_context


class _Collect(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def collected():
    pkg = get_logger()
    handler = _Collect()
    old_level = pkg.level
    pkg.addHandler(handler)
    pkg.setLevel(logging.DEBUG)
    yield handler.records
    pkg.removeHandler(handler)
    pkg.setLevel(old_level)


def test_get_logger_returns_package_children():
    log = get_logger("locator_resolver.some.module")
    assert isinstance(log, logging.Logger)
    assert log.name.startswith("locator_resolver.")


def test_context_nests_and_stays_scoped(collected):
    log = get_logger("locator_resolver.test")
    outer = log_with_context(log, source="a.yaml")
    inner = log_with_context(outer, selector="qa")

    inner.debug("inner")
    outer.debug("outer")
    log.debug("plain")

    by_msg = {r.getMessage(): r for r in collected}
    assert by_msg["inner"].context == {"source": "a.yaml", "selector": "qa"}
    assert by_msg["outer"].context == {"source": "a.yaml"}
    assert not hasattr(by_msg["plain"], "context")


def test_json_lines_formatter_nests_context():
    record = logging.LogRecord("locator_resolver.x", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    record.context = {"selector": "qa"}
    entry = json.loads(JsonLinesFormatter().format(record))
    assert entry["msg"] == "hello there"
    assert entry["level"] == "INFO"
    assert entry["context"] == {"selector": "qa"}


def test_registration_logs_carry_source(collected, registry, tmp_path: Path):
    f = tmp_path / "qa.yaml"
    f.write_text("name: qa\ncss: \"[data-qa='{locator}']\"\n", encoding="utf-8")
    register_selectors(registry, load_selectors_file(f), source=f)

    [record] = [r for r in collected if "Registered selector 'qa'" in r.getMessage()]
    assert record.context == {"source": str(f), "selector": "qa"}

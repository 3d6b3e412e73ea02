import logging

import pytest
import structlog

from citelight.util.logging import configure_logging, request_context


class TestConfigureLogging:
    def setup_method(self) -> None:
        root = logging.getLogger()
        self._original_handlers = list(root.handlers)
        self._original_level = root.level

    def teardown_method(self) -> None:
        root = logging.getLogger()
        root.handlers = list(self._original_handlers)
        root.setLevel(self._original_level)
        structlog.reset_defaults()

    def _added_handlers(self) -> list[logging.Handler]:
        root = logging.getLogger()
        return [h for h in root.handlers if h not in self._original_handlers]

    def test_json_output_default(self) -> None:
        configure_logging()

        added = self._added_handlers()
        assert len(added) == 1
        assert isinstance(added[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_console_output(self) -> None:
        configure_logging(json_output=False)

        assert len(self._added_handlers()) == 1

    def test_log_level_respected(self) -> None:
        configure_logging(log_level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(log_level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_access_log_quietened(self) -> None:
        configure_logging(log_level="DEBUG")

        assert logging.getLogger("aiohttp.access").level == logging.WARNING


class TestRequestContext:
    def teardown_method(self) -> None:
        structlog.contextvars.clear_contextvars()

    def test_binds_fields_for_the_block(self) -> None:
        with request_context(filename="sales.pdf", page=5):
            assert structlog.contextvars.get_contextvars() == {
                "filename": "sales.pdf",
                "page": 5,
            }

        assert structlog.contextvars.get_contextvars() == {}

    def test_unbinds_on_error(self) -> None:
        with pytest.raises(ValueError), request_context(filename="sales.pdf"):
            raise ValueError("boom")

        assert "filename" not in structlog.contextvars.get_contextvars()

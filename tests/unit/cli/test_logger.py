import logging

import pytest

import azurerm.logger as logger_module
from azurerm.core.context import ProviderConfig


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger_module.setup_logger(debug_mode=False)


def test_setup_logger_adds_single_handler():
    first = logger_module.setup_logger()
    second = logger_module.setup_logger(debug_mode=True)

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG
    assert second.handlers[0].level == logging.DEBUG


def test_configure_from_config():
    logger = logger_module.configure_logger_from_config(ProviderConfig(subscription_id="s", debug=True))
    assert logger.isEnabledFor(logging.DEBUG)

    logger = logger_module.configure_logger_from_config(None)
    assert not logger.isEnabledFor(logging.DEBUG)


def test_print_stack_trace_in_debug(caplog):
    logger_module.setup_logger(debug_mode=True)

    with caplog.at_level(logging.DEBUG, logger="azurerm"):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger_module.print_stack_trace()

    assert "RuntimeError: boom" in caplog.text


def test_print_stack_trace_silent_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="azurerm"):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger_module.print_stack_trace()

    assert "boom" not in caplog.text

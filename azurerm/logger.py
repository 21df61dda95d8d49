import logging
import sys
import traceback
from typing import Optional, TYPE_CHECKING

from colorlog import ColoredFormatter

import azurerm.constants as CONSTANTS

if TYPE_CHECKING:
    from azurerm.core.context import ProviderConfig


def setup_logger(debug_mode=False):
    logger = logging.getLogger(CONSTANTS.LOGGER_NAME)
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        # Create console handler
        handler = logging.StreamHandler(sys.stdout)

        # Create colored formatter
        formatter = ColoredFormatter(
            "%(log_color)s[%(levelname)s] %(message)s",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "red,bg_white",
            }
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def print_stack_trace():
    """
    Log the current exception's stack trace when debug logging is enabled.
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(traceback.format_exc())


def configure_logger_from_config(config: Optional["ProviderConfig"]):
    global logger
    debug_mode = bool(config and config.debug)
    logger = setup_logger(debug_mode=debug_mode)
    if debug_mode:
        logger.debug("Debug mode is active.")
    return logger


# Logger defaults to INFO unless reconfigured from the provider config.
logger = setup_logger(debug_mode=False)

"""Primary entry point for the gutter-message plugin.

The host calls :func:`plugin_start` once, keeps the returned controller and
passes every editor notification to ``controller.handle``. Nothing here keeps
the controller in a module global.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from gutter_plugin.controller import PluginController
from gutter_plugin.host import EditorHost
from gutter_plugin.logging_utils import (
    PROPAGATE_ENV_VAR,
    build_rotating_file_handler,
    env_flag,
    resolve_log_level,
    resolve_logs_dir,
)
from gutter_plugin.preferences import PREFERENCES_FILENAME, PluginPreferences, load_preferences
from version import __version__ as GUTTER_MESSAGE_VERSION, is_dev_build

PLUGIN_NAME = "gutter_message"
PLUGIN_VERSION = GUTTER_MESSAGE_VERSION
LOGGER_NAME = "GutterMessage"
LOG_TAG = "gutter_message"
LOG_FILENAME = "gutter-message.log"


def _configure_logger(
    preferences: PluginPreferences,
    *,
    log_dir: Optional[Path] = None,
    plugin_dir: Optional[Path] = None,
) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(preferences.debug_logging or is_dev_build()))
    logger.propagate = env_flag(PROPAGATE_ENV_VAR)
    if not any(getattr(handler, "_gutter_message_handler", False) for handler in logger.handlers):
        target_dir = log_dir or resolve_logs_dir(plugin_dir or Path.cwd())
        formatter = logging.Formatter(f"[%(asctime)s] [{LOG_TAG}] %(levelname)s %(name)s: %(message)s", "%H:%M:%S")
        handler = build_rotating_file_handler(
            target_dir,
            LOG_FILENAME,
            retention=preferences.log_retention,
            formatter=formatter,
        )
        handler._gutter_message_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def plugin_start(
    host: EditorHost,
    plugin_dir: str,
    *,
    log_dir: Optional[Path] = None,
) -> PluginController:
    """Load preferences, configure logging and build the controller for ``host``."""
    base = Path(plugin_dir)
    preferences = load_preferences(base / PREFERENCES_FILENAME)
    logger = _configure_logger(preferences, log_dir=log_dir, plugin_dir=base)
    logger.info("Initialising %s %s from %s", PLUGIN_NAME, PLUGIN_VERSION, plugin_dir)
    return PluginController(host, preferences, logger=logger)


def plugin_stop(controller: PluginController) -> None:
    """Close any open panel and drop loaded messages."""
    controller.reset("plugin stop")
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("%s stopped", PLUGIN_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_gutter_message_handler", False):
            logger.removeHandler(handler)
            handler.close()

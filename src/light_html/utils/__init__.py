"""Shared helpers for light-html."""

from light_html.utils.logger import get_logger, set_log_level

__all__ = ["get_logger", "set_log_level"]

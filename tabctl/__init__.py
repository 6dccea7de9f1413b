"""Command-line control for tabs in a running Chromium-family browser."""

__version__ = "0.3.0"

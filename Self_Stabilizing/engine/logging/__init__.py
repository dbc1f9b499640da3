"""Structured JSON line logging for simulation runs."""

from .logger import log_entry, log_record

__all__ = ["log_entry", "log_record"]

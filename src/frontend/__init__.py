"""Textual config panel for redscope."""

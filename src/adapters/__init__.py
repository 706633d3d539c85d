"""Adapters binding the core to Telegram and HTTP."""

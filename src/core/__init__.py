"""Core domain package for redscope.

Core contains reference extraction, URL building, page verification and the
reply policies without any Telegram or HTTP-client-specific code, keeping the
business logic portable.
"""

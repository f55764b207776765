"""Security analysis of environment variables."""

from envguard.security.analyzer import SecurityAnalyzer, is_weak_secret

__all__ = ["SecurityAnalyzer", "is_weak_secret"]

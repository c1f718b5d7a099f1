"""Static site publishing."""

from .generator import PublishConfig, PublishResult, SiteGenerator

__all__ = ["PublishConfig", "PublishResult", "SiteGenerator"]

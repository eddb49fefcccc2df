"""Service layer package.

Exports high-level services consumed by the CLI and other entry points.
"""

from .journey_service import JourneyService, JourneyServiceConfig, JourneyType

__all__ = ["JourneyService", "JourneyServiceConfig", "JourneyType"]

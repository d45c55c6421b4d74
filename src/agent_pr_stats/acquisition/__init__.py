"""PR acquisition: cache-aware fetching with transport routing."""

from .orchestrator import (
    AcquisitionOrchestrator,
    ComparisonResult,
    FetchResult,
    GitHubFactory,
    default_github_factory,
)

__all__ = [
    "AcquisitionOrchestrator",
    "ComparisonResult",
    "FetchResult",
    "GitHubFactory",
    "default_github_factory",
]

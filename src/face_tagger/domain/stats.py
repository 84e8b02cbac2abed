"""Domain models for scan statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScanSummary:
    """Headline counts for the analyzed photo history."""

    total_photos: int
    recognized: int
    unknown: int


@dataclass(frozen=True)
class IdentityFrequency:
    """How often a single identity (or unknown) appears in scans."""

    key: str
    label: str
    count: int
    share: float

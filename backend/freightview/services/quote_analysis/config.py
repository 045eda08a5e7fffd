"""Quote analysis configuration — single source for all thresholds."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """Business policy constants used by the air vs sea comparison."""
    safe_buffer_days: int = 3               # sea ETA this far ahead of deadline = comfortable
    high_flexibility_days: int = 25         # ready → required window for "high"
    medium_flexibility_days: int = 14       # ready → required window for "medium"
    annual_carrying_cost_rate: float = 0.15  # cost of capital on cargo in transit
    min_quotes_for_reliability: int = 2
    unknown_forwarder_label: str = "Unknown"
    excluded_statuses: tuple[str, ...] = ()  # quote statuses dropped before analysis

    @classmethod
    def from_settings(cls, settings) -> "AnalysisConfig":
        """Build a config from application settings (``ANALYSIS_*`` env vars)."""
        return cls(
            safe_buffer_days=settings.analysis_safe_buffer_days,
            high_flexibility_days=settings.analysis_high_flexibility_days,
            medium_flexibility_days=settings.analysis_medium_flexibility_days,
            annual_carrying_cost_rate=settings.analysis_annual_carrying_cost_rate,
            min_quotes_for_reliability=settings.analysis_min_quotes_for_reliability,
            unknown_forwarder_label=settings.analysis_unknown_forwarder_label,
            excluded_statuses=tuple(settings.analysis_excluded_status_list),
        )


# Singleton — defaults used when the caller passes no config
analysis_config = AnalysisConfig()

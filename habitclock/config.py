"""Configuration dataclasses for habitclock.

Nothing reads configuration implicitly: callers build an AppConfig (usually
via ``AppConfig.from_env()``) and pass the pieces down.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from habitclock.clocks.types import ClockConfig
from habitclock.domain.slider import SliderBoundaryPolicy, parse_policy
from habitclock.storage.blob_store import DEFAULT_CHUNK_SIZE


@dataclass
class StoreConfig:
    """Where dense analytics arrays are persisted."""
    db_path: Path = field(default_factory=lambda: Path.home() / ".habitclock" / "analytics.db")
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls):
        db_path = os.environ.get("HABITCLOCK_DB")
        return cls(db_path=Path(db_path).expanduser()) if db_path else cls()


@dataclass
class AnalyticsConfig:
    """Analytics policies. The slider boundary policy has no default."""
    slider_boundary_policy: SliderBoundaryPolicy | None = None

    @classmethod
    def from_env(cls):
        policy = os.environ.get("HABITCLOCK_SLIDER_POLICY")
        return cls(slider_boundary_policy=parse_policy(policy) if policy else None)


@dataclass
class AppConfig:
    """Top-level config composing all sub-configs."""
    clock: ClockConfig = field(default_factory=ClockConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)

    @classmethod
    def from_env(cls):
        """Create config from environment variables (for production/cron use)."""
        return cls(
            clock=ClockConfig.from_env(),
            store=StoreConfig.from_env(),
            analytics=AnalyticsConfig.from_env(),
        )

    def validate(self) -> list[str]:
        """Return a list of configuration errors (empty = valid)."""
        errors = self.clock.validate()
        if self.store.chunk_size < 1:
            errors.append(f"chunk_size must be positive, got {self.store.chunk_size}")
        return errors


__all__ = ["AnalyticsConfig", "AppConfig", "ClockConfig", "StoreConfig"]

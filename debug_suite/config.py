"""Sweep thresholds and runner defaults for the logic debugger CLI."""

import os
from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class SweepThresholds:
    """Acceptance criteria for an edge-case sweep."""

    min_coverage_percentage: int = 100
    fail_on_conflicts: bool = True


@dataclass(frozen=True)
class RunnerSettings:
    """Output locations and logging for the sweep runner."""

    report_dir: Path = Path("debug_suite/reports")
    summary_csv: Path = Path("edge_case_summary.csv")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RunnerSettings":
        defaults = cls()
        return cls(
            report_dir=Path(os.getenv("LOGIC_DEBUGGER_REPORT_DIR", str(defaults.report_dir))),
            summary_csv=Path(os.getenv("LOGIC_DEBUGGER_SUMMARY_CSV", str(defaults.summary_csv))),
            log_level=os.getenv("LOGIC_DEBUGGER_LOG_LEVEL", defaults.log_level).upper(),
        )


def thresholds_from_env(base: "SweepThresholds | None" = None) -> SweepThresholds:
    base = base or THRESHOLDS
    raw = os.getenv("LOGIC_DEBUGGER_MIN_COVERAGE")
    if raw is None or not raw.strip():
        return base
    return replace(base, min_coverage_percentage=int(raw))


THRESHOLDS = SweepThresholds()

"""Configuration management for loan-engine."""

from dataclasses import dataclass, field
from datetime import date

from loan_engine.exceptions import ConfigurationError

DEFAULT_AFTER_DAYS = 90


@dataclass
class StatusConfig:
    """Thresholds used when deriving loan status."""

    default_after_days: int = DEFAULT_AFTER_DAYS


@dataclass
class DisplayConfig:
    """Display boundary configuration."""

    decimal_places: int = 2
    upcoming_window_days: int = 15
    pretty_json: bool = False


@dataclass
class SampleConfig:
    """Configuration for sample portfolio generation."""

    num_loans: int = 20
    locale: str = "pt_BR"


@dataclass
class EngineConfig:
    """Main configuration for loan-engine."""

    status: StatusConfig = field(default_factory=StatusConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    sample: SampleConfig = field(default_factory=SampleConfig)
    seed: int | None = None
    log_level: str = "INFO"
    reference_date: date | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables.

        Raises
        ------
        ConfigurationError
            If a numeric or date variable cannot be parsed.
        """
        import os

        status = StatusConfig(
            default_after_days=_env_int("LOAN_DEFAULT_AFTER_DAYS", DEFAULT_AFTER_DAYS),
        )

        display = DisplayConfig(
            decimal_places=_env_int("DISPLAY_DECIMAL_PLACES", 2),
            upcoming_window_days=_env_int("UPCOMING_WINDOW_DAYS", 15),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        sample = SampleConfig(
            num_loans=_env_int("SAMPLE_NUM_LOANS", 20),
            locale=os.getenv("SAMPLE_LOCALE", "pt_BR"),
        )

        reference = os.getenv("REFERENCE_DATE")
        if reference:
            try:
                reference_date = date.fromisoformat(reference)
            except ValueError as e:
                raise ConfigurationError(f"REFERENCE_DATE is not an ISO date: {reference!r}") from e
        else:
            reference_date = None

        return cls(
            status=status,
            display=display,
            sample=sample,
            seed=_env_int("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            reference_date=reference_date,
        )


def _env_int(name: str, default: int | None) -> int | None:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e

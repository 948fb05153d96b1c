import os

_settings = None


class Settings:
    """Runtime configuration read from TRAVELCAL_* environment variables."""

    def __init__(
        self,
        currency_symbol: str = "₩",
        currency_decimals: int = 0,
        host: str = "127.0.0.1",
        port: int = 8000,
        log_level: str = "INFO"
    ):
        self.currency_symbol = currency_symbol
        self.currency_decimals = currency_decimals
        self.host = host
        self.port = port
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            return cls(
                currency_symbol=os.environ.get("TRAVELCAL_CURRENCY_SYMBOL", "₩"),
                currency_decimals=int(os.environ.get("TRAVELCAL_CURRENCY_DECIMALS", "0")),
                host=os.environ.get("TRAVELCAL_HOST", "127.0.0.1"),
                port=int(os.environ.get("TRAVELCAL_PORT", "8000")),
                log_level=os.environ.get("TRAVELCAL_LOG_LEVEL", "INFO").upper()
            )
        except ValueError as e:
            raise RuntimeError(f"Invalid TravelCal configuration: {e}")


def get_settings() -> Settings:
    global _settings
    if _settings:
        return _settings

    _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None

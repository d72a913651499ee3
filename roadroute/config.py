"""Configuration classes for roadroute components."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from roadroute.errors import InvalidMultiplier


@dataclass
class TrafficConfig:
    """Named congestion levels and their traffic multipliers."""

    # Free-flowing road, multiplier 1.0 restores the base time
    clear: float = 1.0

    moderate: float = 2.0

    heavy: float = 3.0

    @property
    def levels(self) -> Dict[str, float]:
        return {"clear": self.clear, "moderate": self.moderate, "heavy": self.heavy}

    def multiplier_for(self, level: str) -> float:
        """Return the multiplier for a named level (case-insensitive)."""
        try:
            return self.levels[level.strip().lower()]
        except KeyError:
            valid = ", ".join(self.levels)
            raise InvalidMultiplier(
                f"Unknown traffic level '{level}'. Valid levels are: {valid}",
                {"level": level},
            ) from None


@dataclass
class ServerConfig:
    """Defaults for the HTTP API server."""

    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))


# Global configuration instances
TRAFFIC_CONFIG = TrafficConfig()
SERVER_CONFIG = ServerConfig()

"""
Configuration for the bookstore console.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_SECTION = "bookstore"


@dataclass
class SeedConfig:
    """Where the initial stock comes from."""

    source: str | None = None  # URL or file path; None means the built-in stock
    timeout_seconds: float = 10.0


@dataclass
class ConsoleConfig:
    """Console behaviour."""

    prompt: str = ">>"
    commit_purchases: bool = False  # Take bought books out of stock on "buy"


@dataclass
class StoreConfig:
    """Complete bookstore configuration."""

    seed: SeedConfig = field(default_factory=SeedConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreConfig":
        """Create config from a dictionary (e.g., from YAML)."""
        config = cls()

        if "seed" in data:
            seed = data["seed"] or {}
            config.seed = SeedConfig(
                source=seed.get("source"),
                timeout_seconds=float(seed.get("timeout_seconds", 10.0)),
            )

        if "console" in data:
            console = data["console"] or {}
            config.console = ConsoleConfig(
                prompt=console.get("prompt", ">>"),
                commit_purchases=bool(console.get("commit_purchases", False)),
            )

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> "StoreConfig":
        """Load config from a YAML file. A missing file gives the defaults."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get(CONFIG_SECTION) or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "seed": {
                "source": self.seed.source,
                "timeout_seconds": self.seed.timeout_seconds,
            },
            "console": {
                "prompt": self.console.prompt,
                "commit_purchases": self.console.commit_purchases,
            },
        }

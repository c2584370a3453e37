"""
Configuration for the scaffolding helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

RENDERERS = ("default", "verbose", "silent")


@dataclass
class FormatterConfig:
    """Configuration for the post-render source formatter."""

    # Whether formatting is enabled
    enabled: bool = True

    # Command used to invoke prettier (e.g. ["npx", "prettier"])
    command: list[str] = field(default_factory=lambda: ["prettier"])

    # Seconds to wait for a single formatter run
    timeout: int = 30


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        overwrite_existing: Replace files that already exist instead of failing
    """

    overwrite_existing: bool = False


@dataclass
class ScaffoldConfig:
    """Top-level configuration options."""

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    # Task renderer: "default", "verbose" or "silent"
    renderer: str = "default"

    # Directory holding the templates (None = packaged templates)
    template_root: str | None = None

    @staticmethod
    def from_dict(d: dict) -> ScaffoldConfig:
        """Create a config from a dictionary."""
        config = ScaffoldConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                config.output = OutputConfig(**v)
            elif k == "renderer":
                if v not in RENDERERS:
                    raise ValueError(f"Unknown renderer {v!r}, expected one of {', '.join(RENDERERS)}")
                config.renderer = v
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": list(self.formatter.command),
                "timeout": self.formatter.timeout,
            },
            "output": {
                "overwrite_existing": self.output.overwrite_existing,
            },
            "renderer": self.renderer,
            "template_root": self.template_root,
        }

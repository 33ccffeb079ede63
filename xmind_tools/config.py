"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "XMIND_TOOLS_"


@dataclass
class Settings:
    server_name: str = "xmind-mcp"
    # Base directory for relative save paths
    output_dir: Path = field(default_factory=Path.cwd)
    log_level: str = "INFO"

    def resolve_output_path(self, file_path: str) -> Path:
        path = Path(file_path).expanduser()
        if not path.is_absolute():
            path = self.output_dir / path
        return path


def load_settings(environ=None) -> Settings:
    """Build Settings from XMIND_TOOLS_* environment variables."""
    env = os.environ if environ is None else environ
    settings = Settings()

    name = env.get(f"{ENV_PREFIX}SERVER_NAME")
    if name:
        settings.server_name = name

    output_dir = env.get(f"{ENV_PREFIX}OUTPUT_DIR")
    if output_dir:
        settings.output_dir = Path(output_dir).expanduser()

    level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level:
        settings.log_level = level.upper()

    return settings

from __future__ import annotations

from dataclasses import dataclass

from inlinestyle._version import __version__


@dataclass(frozen=True)
class InlineStyleConfig:
    base_uri: str = ""  # prefix for relative <link href> values
    fetch_timeout: float = 10.0  # seconds
    max_fetch_workers: int = 4  # 1 = fetch links sequentially
    strip_control_chars: bool = True
    pretty_print: bool = True
    user_agent: str = f"inlinestyle/{__version__}"

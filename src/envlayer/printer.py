from __future__ import annotations

from typing import Iterable


def format_layers(layers: Iterable[str]) -> str:
    """Render resolved layers, lowest precedence first."""
    layers = list(layers)
    lines = ["Configuration layers:"]
    if not layers:
        lines.append("  - none")
    else:
        lines.extend(f"  {index}. {layer}" for index, layer in enumerate(layers, start=1))
    return "\n".join(lines)

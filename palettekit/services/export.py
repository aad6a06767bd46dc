"""
Palette export formats.
"""
import json
from typing import Iterable, Optional, Sequence

from palettekit.services.colors.conversions import hex_to_hsl, hex_to_rgb, normalize_hex
from palettekit.services.colors.naming import name_for

EXPORT_FORMATS = ("css", "json")


def to_css_variables(hex_colors: Sequence[str], prefix: str = "color") -> str:
    """
    Render colors as CSS custom properties on ``:root``.

    >>> print(to_css_variables(["#FF0000", "#00ff00"]))
    :root {
      --color-1: #FF0000;
      --color-2: #00FF00;
    }
    """
    lines = [f"  --{prefix}-{i}: {normalize_hex(c)};" for i, c in enumerate(hex_colors, start=1)]
    return ":root {\n" + "\n".join(lines) + "\n}"


def to_json(hex_colors: Iterable[str], palette_name: Optional[str] = None,
            names: Optional[Sequence[str]] = None) -> str:
    """Serialize a palette with rgb/hsl breakdowns; names default to the namer."""
    entries = []
    for i, hex_color in enumerate(hex_colors):
        hsl = hex_to_hsl(hex_color)
        entries.append({
            "hex": normalize_hex(hex_color),
            "name": names[i] if names else name_for(hex_color),
            "rgb": list(hex_to_rgb(hex_color)),
            "hsl": {"h": hsl.h, "s": hsl.s, "l": hsl.l},
        })
    return json.dumps({"palette_name": palette_name, "colors": entries}, indent=2)


def export_palette(hex_colors: Sequence[str], fmt: str = "css",
                   palette_name: Optional[str] = None,
                   names: Optional[Sequence[str]] = None) -> str:
    """Dispatch to an export format by name."""
    if fmt == "css":
        return to_css_variables(hex_colors)
    if fmt == "json":
        return to_json(hex_colors, palette_name, names)
    raise ValueError(f"Unsupported export format: {fmt!r}. Supported: {', '.join(EXPORT_FORMATS)}")

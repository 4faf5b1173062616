"""Theme colors and color utilities for the UI."""

from tapdeep.core.particles import DUST, SPARK


class HomeColors:
    """Earthy palette: sand surface, rock shadows, ember accents."""

    BG_TOP = "#f3e9dc"
    BG_MIDDLE = "#e2cfb6"
    BG_BOTTOM = "#c8ab88"

    PRIMARY = "#8d5524"
    PRIMARY_LIGHT = "#c68642"
    PRIMARY_DARK = "#5b3716"

    EMBER = "#ff8a3d"
    GOLD = "#ffcc4d"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(141, 85, 36, 0.18)"

    TEXT_PRIMARY = "#2e1f12"
    TEXT_SECONDARY = "#5d4a3a"
    TEXT_MUTED = "#8a7767"

    PROGRESS_TRACK = "#eadbc8"
    PROGRESS_FILL = "#8d5524"


PARTICLE_COLORS = {
    DUST: "#9c7a54",
    SPARK: "#ffd166",
}


def particle_color(kind: str) -> str:
    """Base #RRGGBB color for a particle kind (unknown kinds draw as dust)."""
    return PARTICLE_COLORS.get(kind, PARTICLE_COLORS[DUST])


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def with_alpha(color: str, opacity: float) -> tuple[int, int, int, int]:
    """Turn #RRGGBB plus opacity in [0, 1] into an RGBA tuple (0-255)."""
    color = color.strip().lstrip("#")
    r, g, b = int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)
    alpha = int(round(max(0.0, min(1.0, opacity)) * 255))
    return (r, g, b, alpha)

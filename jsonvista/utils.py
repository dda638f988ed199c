from typing import Dict

# Node accent colors by JSON type
TYPE_COLORS: Dict[str, str] = {
    'object': '#60a5fa',   # blue
    'array': '#c084fc',    # purple
    'string': '#4ade80',   # green
    'number': '#fbbf24',   # amber
    'boolean': '#f87171',  # red
    'null': '#94a3b8',     # slate
}

BACKGROUND_COLOR = '#1e1e1e'
NODE_FILL_COLOR = '#2b2b2b'


def color_for_type(value_type: str) -> str:
    """Accent color for a JSON type name. Unknown types get the null color."""
    return TYPE_COLORS.get(value_type, TYPE_COLORS['null'])


def lerp_hex(hex_a: str, hex_b: str, t: float) -> str:
    """Linearly interpolates between two hex colors by t (0.0 to 1.0)."""
    hex_a = hex_a.lstrip('#')
    hex_b = hex_b.lstrip('#')
    r1, g1, b1 = tuple(int(hex_a[i:i+2], 16) for i in (0, 2, 4))
    r2, g2, b2 = tuple(int(hex_b[i:i+2], 16) for i in (0, 2, 4))
    r = int(r1 + (r2 - r1) * t)
    g = int(g1 + (g2 - g1) * t)
    b = int(b1 + (b2 - b1) * t)
    return '#{:02x}{:02x}{:02x}'.format(r, g, b)


def hex_to_rgba(hex_color: str, opacity: float) -> str:
    """Converts hex color and opacity to rgba string."""
    hex_color = hex_color.lstrip('#')
    r, g, b = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    return f'rgba({r}, {g}, {b}, {opacity})'

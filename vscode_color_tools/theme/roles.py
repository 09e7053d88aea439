from ..color import color_from_hex, shade

# Fixed roles that don't follow the base color
EDITOR_BACKGROUND = "#0f1115"
EDITOR_FOREGROUND = "#e6e6e6"
MUTED_FOREGROUND = "#9aa3ad"

# (lightness_delta, saturation_delta) applied to the base color
ACCENT_SHADES = {
    "accent_dim": (-10, -5),
    "accent_dark": (-18, -5),
    "accent_light": (20, -20),
    "bg1": (-36, -55),  # panels and sidebar
    "bg2": (-30, -60),  # title and activity bar
}


def derive_roles(base_hex):
    """Derive the named theme roles from a single base color.

    Args:
        base_hex: Normalized ``#rrggbb`` base (accent) color

    Returns:
        dict: role name -> Color
    """
    accent = color_from_hex(base_hex)
    roles = {"accent": accent}
    for name, (dl, ds) in ACCENT_SHADES.items():
        roles[name] = shade(accent, lightness_delta=dl, saturation_delta=ds)

    roles["bg0"] = color_from_hex(EDITOR_BACKGROUND)
    roles["fg0"] = color_from_hex(EDITOR_FOREGROUND)
    roles["muted"] = color_from_hex(MUTED_FOREGROUND)
    return roles

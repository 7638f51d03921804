"""Built-in theme presets.

Presets are static and never stored. The first entry doubles as the theme
shown for profiles that have not activated one.
"""

from linkboard.theme.schemas import (
    Gradient,
    ThemeColors,
    ThemeFonts,
    ThemeGradients,
    ThemeLayout,
    ThemePreset,
    ThemeSettings,
)


def _gradients(
    background: tuple[str, str, float] | None = None,
    button: tuple[str, str, float] | None = None,
) -> ThemeGradients:
    def gradient(spec: tuple[str, str, float] | None) -> Gradient:
        if spec is None:
            return Gradient(enabled=False, start="#ffffff", end="#ffffff", angle=0)
        start, end, angle = spec
        return Gradient(enabled=True, start=start, end=end, angle=angle)

    return ThemeGradients(
        background=gradient(background),
        card=gradient(None),
        button=gradient(button),
    )


def _fonts(heading: str, body: str, color: str) -> ThemeFonts:
    return ThemeFonts(
        heading=heading,
        body=body,
        display=heading,
        heading_color=color,
        body_color=color,
        display_color=color,
    )


_PRESETS: list[tuple[str, ThemeSettings]] = [
    (
        "Classic Light",
        ThemeSettings(
            colors=ThemeColors(
                primary="#18181b",
                primary_foreground="#fafafa",
                secondary="#f4f4f5",
                secondary_foreground="#18181b",
                accent="#f4f4f5",
                accent_foreground="#18181b",
                background="#ffffff",
                foreground="#09090b",
                card="#ffffff",
                card_foreground="#09090b",
                muted="#f4f4f5",
                muted_foreground="#71717a",
                border="#e4e4e7",
                input="#e4e4e7",
                ring="#18181b",
            ),
            gradients=_gradients(),
            fonts=_fonts("Inter", "Inter", "#09090b"),
            layout=ThemeLayout(
                border_radius=12, card_style="elevated", spacing="normal", shadow_intensity=20
            ),
        ),
    ),
    (
        "Midnight",
        ThemeSettings(
            colors=ThemeColors(
                primary="#818cf8",
                primary_foreground="#0f172a",
                secondary="#1e293b",
                secondary_foreground="#e2e8f0",
                accent="#312e81",
                accent_foreground="#e0e7ff",
                background="#0f172a",
                foreground="#e2e8f0",
                card="#1e293b",
                card_foreground="#e2e8f0",
                muted="#334155",
                muted_foreground="#94a3b8",
                border="#334155",
                input="#334155",
                ring="#818cf8",
            ),
            gradients=_gradients(background=("#0f172a", "#312e81", 160)),
            fonts=_fonts("Poppins", "Inter", "#e2e8f0"),
            layout=ThemeLayout(
                border_radius=16, card_style="flat", spacing="normal", shadow_intensity=0
            ),
        ),
    ),
    (
        "Sunset",
        ThemeSettings(
            colors=ThemeColors(
                primary="#f97316",
                primary_foreground="#ffffff",
                secondary="#fed7aa",
                secondary_foreground="#7c2d12",
                accent="#fb7185",
                accent_foreground="#ffffff",
                background="#fff7ed",
                foreground="#431407",
                card="#ffffff",
                card_foreground="#431407",
                muted="#ffedd5",
                muted_foreground="#9a3412",
                border="#fdba74",
                input="#fdba74",
                ring="#f97316",
            ),
            gradients=_gradients(
                background=("#fb923c", "#f43f5e", 135),
                button=("#f97316", "#e11d48", 90),
            ),
            fonts=_fonts("Playfair Display", "Lato", "#431407"),
            layout=ThemeLayout(
                border_radius=24, card_style="elevated", spacing="spacious", shadow_intensity=40
            ),
        ),
    ),
    (
        "Forest",
        ThemeSettings(
            colors=ThemeColors(
                primary="#15803d",
                primary_foreground="#f0fdf4",
                secondary="#dcfce7",
                secondary_foreground="#14532d",
                accent="#a3e635",
                accent_foreground="#1a2e05",
                background="#f0fdf4",
                foreground="#052e16",
                card="#ffffff",
                card_foreground="#052e16",
                muted="#dcfce7",
                muted_foreground="#166534",
                border="#86efac",
                input="#86efac",
                ring="#15803d",
            ),
            gradients=_gradients(),
            fonts=_fonts("Merriweather", "Source Sans 3", "#052e16"),
            layout=ThemeLayout(
                border_radius=8, card_style="outlined", spacing="normal", shadow_intensity=10
            ),
        ),
    ),
    (
        "Monochrome",
        ThemeSettings(
            colors=ThemeColors(
                primary="#000000",
                primary_foreground="#ffffff",
                secondary="#ffffff",
                secondary_foreground="#000000",
                accent="#000000",
                accent_foreground="#ffffff",
                background="#ffffff",
                foreground="#000000",
                card="#ffffff",
                card_foreground="#000000",
                muted="#f5f5f5",
                muted_foreground="#525252",
                border="#000000",
                input="#000000",
                ring="#000000",
            ),
            gradients=_gradients(),
            fonts=_fonts("Space Grotesk", "Space Mono", "#000000"),
            layout=ThemeLayout(
                border_radius=0, card_style="outlined", spacing="compact", shadow_intensity=0
            ),
        ),
    ),
]


def list_presets() -> list[ThemePreset]:
    """Return the preset catalog with ids ``preset-0``, ``preset-1``, ..."""
    return [
        ThemePreset(id=f"preset-{index}", name=name, **settings.model_dump())
        for index, (name, settings) in enumerate(_PRESETS)
    ]


def default_preset() -> ThemePreset:
    return list_presets()[0]

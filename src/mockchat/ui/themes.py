"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Dark slate palette: gray surfaces with a blue accent for actions
SLATE_DARK = Theme(
    name="mockchat-slate",
    primary="#2563eb",      # Blue 600 - buttons, active conversation
    secondary="#9ca3af",    # Gray 400 - secondary text
    accent="#60a5fa",       # Blue 400 - focus highlights
    foreground="#f3f4f6",   # Gray 100 - body text
    background="#111827",   # Gray 900 - app background
    success="#22c55e",
    warning="#f59e0b",
    error="#ef4444",
    surface="#1f2937",      # Gray 800 - user bubbles, inputs
    panel="#111827",        # Gray 900 - sidebar and header
    dark=True,
    variables={
        "border": "#374151",          # Gray 700
        "border-blurred": "#1f2937",

        "input-cursor-background": "#f3f4f6",
        "input-cursor-foreground": "#111827",
        "input-selection-background": "#2563eb 30%",

        "scrollbar": "#374151",
        "scrollbar-hover": "#4b5563",
        "scrollbar-active": "#2563eb",
        "scrollbar-background": "#111827",
        "scrollbar-corner-color": "#111827",

        "footer-foreground": "#d1d5db",
        "footer-background": "#111827",
        "footer-key-foreground": "#60a5fa",
        "footer-key-background": "#1f2937",

        "text-muted": "#6b7280",       # Gray 500 - timestamps
        "text-disabled": "#4b5563",

        "button-foreground": "#f3f4f6",
        "button-color-foreground": "#ffffff",
        "button-focus-text-style": "bold",
    },
)

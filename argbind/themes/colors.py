# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The Nord palette and the rich theme used by the argbind console.
"""
from rich.style import Style
from rich.theme import Theme


class NordColors:
    """The Nord palette."""

    NORD0 = "#2E3440"
    NORD3 = "#4C566A"
    NORD4 = "#D8DEE9"
    NORD6 = "#ECEFF4"
    NORD8 = "#88C0D0"
    NORD9 = "#81A1C1"
    NORD11 = "#BF616A"
    NORD12 = "#D08770"
    NORD13 = "#EBCB8B"
    NORD14 = "#A3BE8C"
    NORD15 = "#B48EAD"


def get_nord_theme() -> Theme:
    """Styles for the message categories argbind prints."""
    return Theme(
        {
            "info": Style(color=NordColors.NORD8),
            "success": Style(color=NordColors.NORD14, bold=True),
            "warning": Style(color=NordColors.NORD13),
            "error": Style(color=NordColors.NORD11, bold=True),
            "usage": Style(color=NordColors.NORD4),
            "hint": Style(color=NordColors.NORD3, italic=True),
            "command": Style(color=NordColors.NORD9, bold=True),
            "option": Style(color=NordColors.NORD15),
        }
    )

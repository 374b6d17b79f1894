"""Display server detection (Wayland or X11)."""

import os

from ..report import Report


def collect(report: Report) -> None:
    report.heading(1, "Display Server Configuration")

    wayland = os.environ.get("WAYLAND_DISPLAY")
    x_display = os.environ.get("DISPLAY")

    if wayland:
        report.write(f"**Display Server**: Wayland ({wayland})", "")
        report.heading(2, "Session Type")
        report.code_block([os.environ.get("XDG_SESSION_TYPE", "")])
    elif x_display:
        report.write(f"**Display Server**: X11 ({x_display})", "")
        report.command_section(
            "Display Configuration",
            ["xrandr", "--current"],
            pattern=r"connected|\*",
        )
    else:
        report.write("**Display Server**: not detected", "")

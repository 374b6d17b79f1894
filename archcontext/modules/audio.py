"""Audio stack: PulseAudio/PipeWire, WirePlumber and ALSA."""

from ..report import Report

PIPEWIRE_CONF = "~/.config/pipewire/pipewire.conf"
ASOUND_CONF = "/etc/asound.conf"


def collect(report: Report) -> None:
    report.heading(1, "Audio Configuration")

    report.command_section(
        "PulseAudio/PipeWire Info",
        ["pactl", "info"],
        pattern=r"Server Name:|Default S",
    )
    report.command_section("Audio Sinks", ["pactl", "list", "sinks", "short"])
    report.command_section("Audio Sources", ["pactl", "list", "sources", "short"])
    report.command_section("WirePlumber Status", ["wpctl", "status"])

    report.config_section(PIPEWIRE_CONF, "PipeWire Configuration")
    report.config_section(ASOUND_CONF, "ALSA Configuration")

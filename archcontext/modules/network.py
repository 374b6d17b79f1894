"""Network interfaces, network services and DNS."""

from ..report import Report


def collect(report: Report) -> None:
    report.heading(1, "Network Configuration")

    report.command_section("Network Interfaces", ["ip", "-brief", "addr", "show"])
    report.command_section(
        "Network Services Status",
        ["systemctl", "is-active", "NetworkManager", "systemd-networkd", "systemd-resolved"],
        allow_nonzero=True,
    )
    report.command_section("DNS Configuration", ["resolvectl", "status"], limit=20)

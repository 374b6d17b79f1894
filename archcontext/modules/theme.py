"""
GTK/Qt theme diagnostics.

Collects the places a desktop theme can be set from, so a mismatch between
them (environment, GTK settings files, xfconf, gsettings, the XDG portal)
can be spotted in one report.
"""

import logging
import os
from pathlib import Path

from .. import runner
from ..report import Report

logger = logging.getLogger(__name__)

THEME_ENV_VARS = (
    "GTK_THEME",
    "GTK2_RC_FILES",
    "QT_STYLE_OVERRIDE",
    "QT_QPA_PLATFORMTHEME",
    "XDG_CONFIG_HOME",
)

STARTUP_FILES = (
    "~/.profile",
    "~/.xprofile",
    "~/.xsession",
    "~/.xsessionrc",
    "~/.xinitrc",
    "~/.bashrc",
    "~/.zshrc",
)
STARTUP_THEME_VARS = r"GTK_THEME|GTK2_RC|QT_"

GTK_SETTINGS_FILES = (
    "~/.config/gtk-3.0/settings.ini",
    "~/.config/gtk-4.0/settings.ini",
    "~/.gtkrc-2.0",
    "~/.gtkrc-2.0.mine",
)

GSETTINGS_SCHEMA = "org.gnome.desktop.interface"
GSETTINGS_KEYS = ("gtk-theme", "color-scheme", "gtk-application-prefer-dark-theme")

PORTAL_UNITS = ("xdg-desktop-portal-gtk", "xdg-desktop-portal")
SETTINGS_DAEMONS = r"xfsettingsd|xsettingsd|gsd-xsettings"
THEME_PACKAGES = r"^(?!.*lib).*(arc|theme|gtk|qt5ct|kvantum)"
ENVIRONMENT_D = "~/.config/environment.d"


def collect(report: Report) -> None:
    report.heading(1, "Theme Configuration")

    report.heading(2, "Theme Environment Variables")
    env_lines = [f"{name}={os.environ.get(name, '')}" for name in THEME_ENV_VARS]
    report.code_block(report.redact_lines(env_lines))

    _collect_startup_files(report)

    for settings_file in GTK_SETTINGS_FILES:
        report.config_section(settings_file, settings_file)

    report.command_section(
        "XFCE xsettings",
        ["xfconf-query", "-c", "xsettings", "-lv"],
        pattern=r"Theme|Dark|Color",
    )
    report.command_section(
        "XFCE Window Manager Theme",
        ["xfconf-query", "-c", "xfwm4", "-p", "/general/theme"],
    )

    _collect_gsettings(report)

    report.command_section(
        "dconf Interface Settings",
        ["dconf", "dump", f"/{GSETTINGS_SCHEMA.replace('.', '/')}/"],
        pattern=r"theme|dark|color",
    )

    for unit in PORTAL_UNITS:
        report.command_section(
            f"Portal Service: {unit}",
            ["systemctl", "--user", "status", unit],
            limit=3,
            allow_nonzero=True,
        )

    report.command_section("Settings Daemons", ["ps", "aux"], pattern=SETTINGS_DAEMONS)
    report.command_section("Theme Packages", ["pacman", "-Q"], pattern=THEME_PACKAGES, redact=False)

    env_dir = Path(ENVIRONMENT_D).expanduser()
    if env_dir.is_dir():
        for conf in sorted(env_dir.glob("*.conf")):
            report.config_section(conf, f"environment.d: {conf.name}")


def _collect_startup_files(report: Report) -> None:
    lines = []
    for startup_file in STARTUP_FILES:
        path = Path(startup_file).expanduser()
        try:
            content = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except FileNotFoundError:
            lines.append(f"{startup_file} does not exist")
            continue
        except OSError as e:
            logger.debug(f"Cannot read {startup_file}: {e}")
            lines.append(f"{startup_file} is not readable")
            continue
        lines.append(f"{startup_file} exists:")
        lines.extend("  " + line for line in runner.filter_lines(content, STARTUP_THEME_VARS))

    report.heading(2, "Startup Files")
    report.code_block(report.redact_lines(lines))


def _collect_gsettings(report: Report) -> None:
    if not runner.command_exists("gsettings"):
        logger.warning("Skipping GSettings - command not found: gsettings")
        return

    logger.info("Collecting: GSettings")
    report.heading(2, "GSettings")
    for key in GSETTINGS_KEYS:
        result = runner.run_command(["gsettings", "get", GSETTINGS_SCHEMA, key])
        report.bullet(key, result.output.strip() if result.ok else "Key not found")
    report.write("")

"""
Tests for the module registry and the individual module handlers.

Each handler is run in isolation against a fake system and a temporary
HOME directory.
"""

import datetime

import pytest
from conftest import top_level_headings

from archcontext.modules import ALL_MODULES, BASIC_MODULES, MODULES
from archcontext.modules.packages import group_packages, installed_packages
from archcontext.modules.summary import human_size, write_summary
from archcontext.report import ERROR_MARKER, Report
from redaction import RedactionEngine

NOW = datetime.datetime(2024, 5, 17, 9, 30, 5)


@pytest.fixture
def report(tmp_path, fake_home):
    out = tmp_path / "out"
    return Report.create(out, engine=RedactionEngine(), now=NOW, hostname="archbox")


class TestRegistry:

    def test_module_names_in_report_order(self):
        assert ALL_MODULES == (
            "hardware", "os", "packages", "config", "audio", "display",
            "network", "services", "development", "shell", "security", "theme",
        )

    def test_basic_is_a_subset(self):
        assert BASIC_MODULES == ("hardware", "os", "packages")
        assert set(BASIC_MODULES) <= set(ALL_MODULES)

    @pytest.mark.parametrize("name", ALL_MODULES)
    def test_each_handler_writes_one_top_level_section(self, name, report, fake_system):
        MODULES[name](report)

        headings = top_level_headings(report.path.read_text())
        assert len(headings) == 2
        assert headings[0] == "Arch Linux System Context"


class TestHardware:

    def test_nvidia_gpu(self, report, fake_system):
        fake_system.add("lspci", "01:00.0 VGA compatible controller: NVIDIA Corporation GA104\n00:1f.3 Audio device: Intel")
        fake_system.add(
            "nvidia-smi --query-gpu=name,driver_version,memory.total --format=csv,noheader",
            "NVIDIA GeForce RTX 3070, 550.78, 8192 MiB",
        )

        MODULES["hardware"](report)

        text = report.path.read_text()
        assert "# Hardware & System Information" in text
        assert "## NVIDIA GPU Info" in text
        assert "NVIDIA GeForce RTX 3070, 550.78, 8192 MiB" in text
        assert "glxinfo" not in fake_system.calls

    def test_amd_gpu(self, report, fake_system):
        fake_system.add("lspci", "03:00.0 VGA compatible controller: Advanced Micro Devices, Inc. [AMD/ATI] Navi 21")
        fake_system.add("glxinfo", "direct rendering: Yes\nOpenGL renderer string: AMD Radeon RX 6800\nOpenGL version string: 4.6")

        MODULES["hardware"](report)

        text = report.path.read_text()
        assert "## AMD GPU Info" in text
        assert "OpenGL renderer string: AMD Radeon RX 6800" in text
        assert "direct rendering" not in text

    def test_cpu_fields_are_filtered(self, report, fake_system):
        fake_system.add("lscpu", "Architecture: x86_64\nModel name: AMD Ryzen 7\nSocket(s): 1\nFlags: fpu vme")

        MODULES["hardware"](report)

        text = report.path.read_text()
        assert "Model name: AMD Ryzen 7" in text
        assert "Socket(s): 1" in text
        assert "Flags: fpu vme" not in text

    def test_no_gpu_section_without_lspci(self, report, fake_system):
        fake_system.missing.add("lspci")

        MODULES["hardware"](report)

        assert "GPU Info" not in report.path.read_text()


class TestPackages:

    def test_group_packages(self):
        groups = group_packages([
            "vim", "linux", "xorg-server", "libx11", "python-pip", "plasma-desktop",
            "gtk3", "linux-firmware", "libpython-stub", "kdeconnect",
        ])

        assert list(groups) == [
            "Kernel & System", "X.org/Display", "KDE/Plasma", "GNOME/GTK",
            "Python", "Libraries", "Other Packages",
        ]
        assert groups["Kernel & System"] == ["linux", "linux-firmware"]
        assert groups["KDE/Plasma"] == ["kdeconnect", "plasma-desktop"]
        assert groups["Libraries"] == ["libpython-stub", "libx11"]
        assert groups["Other Packages"] == ["vim"]

    def test_empty_groups_are_omitted(self):
        assert group_packages(["vim", "git"]) == {"Other Packages": ["git", "vim"]}

    def test_installed_packages(self, fake_system):
        fake_system.add("pacman -Q", "base 3-2\nlinux 6.6.1.arch1-1\n")
        fake_system.add("pacman -Qe", "linux 6.6.1.arch1-1")

        assert installed_packages() == ["base", "linux"]
        assert installed_packages(explicit=True) == ["linux"]

    def test_installed_packages_without_pacman(self, fake_system):
        fake_system.missing.add("pacman")

        assert installed_packages() is None

    def test_collect(self, report, fake_system):
        fake_system.add("pacman -Q", "base 3-2\nlinux 6.6.1.arch1-1\nvim 9.1-1")
        fake_system.add("pacman -Qe", "linux 6.6.1.arch1-1\nvim 9.1-1")
        fake_system.add("yay -Qm", "yay-bin 12.3.5-1")

        MODULES["packages"](report)

        text = report.path.read_text()
        assert "## Total Installed Packages Count\n\n```\n3\n```" in text
        assert "### Kernel & System\n\n```\nlinux\n```" in text
        assert "### Other Packages\n\n```\nvim\n```" in text
        assert "## AUR Packages" in text
        assert "yay-bin 12.3.5-1" in text
        assert "paru -Qm" not in fake_system.calls

    def test_falls_back_to_paru(self, report, fake_system):
        fake_system.missing.add("yay")

        MODULES["packages"](report)

        assert "paru -Qm" in fake_system.calls

    def test_pacman_failure_writes_marker(self, report, fake_system):
        fake_system.add("pacman -Q", "error: could not open database", returncode=1)

        MODULES["packages"](report)

        assert f"{ERROR_MARKER}: pacman -Q" in report.path.read_text()

    def test_skipped_without_pacman(self, report, fake_system, caplog):
        fake_system.missing.add("pacman")

        MODULES["packages"](report)

        text = report.path.read_text()
        assert "# Package Management" in text
        assert "## Total Installed Packages Count" not in text
        assert "command not found: pacman" in caplog.text


class TestDisplay:

    def test_wayland(self, report, fake_system, monkeypatch):
        monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
        monkeypatch.setenv("XDG_SESSION_TYPE", "wayland")

        MODULES["display"](report)

        text = report.path.read_text()
        assert "**Display Server**: Wayland (wayland-0)" in text
        assert "## Session Type" in text
        assert "xrandr --current" not in fake_system.calls

    def test_x11(self, report, fake_system, monkeypatch):
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        monkeypatch.setenv("DISPLAY", ":0")
        fake_system.add("xrandr --current", "Screen 0: minimum 320\nHDMI-1 connected primary 2560x1440\n   2560x1440 59.95*+\nDP-1 disconnected")

        MODULES["display"](report)

        text = report.path.read_text()
        assert "**Display Server**: X11 (:0)" in text
        assert "HDMI-1 connected primary 2560x1440" in text
        assert "59.95*+" in text
        assert "Screen 0" not in text

    def test_headless(self, report, fake_system, monkeypatch):
        monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
        monkeypatch.delenv("DISPLAY", raising=False)

        MODULES["display"](report)

        assert "**Display Server**: not detected" in report.path.read_text()


class TestServicesAndNetwork:

    def test_template_units_are_excluded(self, report, fake_system):
        fake_system.add(
            "systemctl list-unit-files --state=enabled --type=service",
            "UNIT FILE STATE PRESET\nsshd.service enabled disabled\ngetty@.service enabled enabled",
        )

        MODULES["services"](report)

        text = report.path.read_text()
        assert "sshd.service enabled disabled" in text
        assert "getty@.service" not in text

    def test_dns_is_limited_and_addresses_redacted(self, report, fake_system):
        fake_system.add("resolvectl status", "\n".join(f"DNS Servers: 10.0.0.{n}" for n in range(30)))

        MODULES["network"](report)

        text = report.path.read_text()
        assert text.count("DNS Servers: <IP>") == 20
        assert "10.0.0." not in text

    def test_inactive_services_are_reported(self, report, fake_system):
        fake_system.add(
            "systemctl is-active NetworkManager systemd-networkd systemd-resolved",
            "active\ninactive\nactive",
            returncode=3,
        )

        MODULES["network"](report)

        text = report.path.read_text()
        assert "active\ninactive\nactive" in text
        assert ERROR_MARKER not in text


class TestDevelopment:

    def test_lists_installed_tools(self, report, fake_system):
        fake_system.installed = {"gcc", "go"}
        fake_system.add("gcc --version", "gcc (GCC) 13.2.1 20230801\nCopyright (C) 2023")
        fake_system.add("go version", "go version go1.21.5 linux/amd64")

        MODULES["development"](report)

        text = report.path.read_text()
        assert "- **gcc**: gcc (GCC) 13.2.1 20230801" in text
        assert "- **go**: go version go1.21.5 linux/amd64" in text
        assert "**python**" not in text
        assert "Copyright" not in text


class TestShell:

    def test_path_and_rc_files(self, report, fake_system, fake_home, monkeypatch):
        monkeypatch.setenv("SHELL", "/usr/bin/zsh")
        monkeypatch.setenv("PATH", "/usr/local/bin:/usr/bin:/home/alice/.local/bin")
        rc = "export API_TOKEN=abc123\n" + "".join(f"alias a{n}=true\n" for n in range(59))
        (fake_home / ".bashrc").write_text(rc)

        MODULES["shell"](report)

        text = report.path.read_text()
        assert "```\n/usr/bin/zsh\n```" in text
        assert "/home/<USER>/.local/bin" in text
        assert "## .bashrc (first 50 lines)" in text
        assert "```bash\nexport API_TOKEN=<REDACTED>\n" in text
        assert "abc123" not in text
        assert "... (60 lines total, showing first 50)" in text
        assert ".zshrc (first 50 lines)" not in text


class TestSecurity:

    def test_sudoers_not_readable(self, report, fake_system):
        fake_system.add("sudo -n cat /etc/sudoers", "sudo: a password is required", returncode=1)

        MODULES["security"](report)

        text = report.path.read_text()
        assert "Sudoers not readable without password" in text
        assert "a password is required" not in text

    def test_sudoers_rules_without_comments(self, report, fake_system):
        fake_system.add("sudo -n cat /etc/sudoers", "## comment\nroot ALL=(ALL:ALL) ALL\n\n%wheel ALL=(ALL:ALL) ALL")

        MODULES["security"](report)

        text = report.path.read_text()
        assert "root ALL=(ALL:ALL) ALL\n%wheel ALL=(ALL:ALL) ALL" in text
        assert "## comment" not in text


class TestTheme:

    def test_startup_files_and_gsettings(self, report, fake_system, fake_home, monkeypatch):
        monkeypatch.setenv("GTK_THEME", "Arc-Dark")
        (fake_home / ".xprofile").write_text("export GTK_THEME=Arc-Dark\nexport EDITOR=vim\n")
        fake_system.add("gsettings get org.gnome.desktop.interface gtk-theme", "'Arc-Dark'")
        fake_system.add("gsettings get org.gnome.desktop.interface color-scheme", "No such key", returncode=1)

        MODULES["theme"](report)

        text = report.path.read_text()
        assert "GTK_THEME=Arc-Dark" in text
        assert "~/.profile does not exist" in text
        assert "~/.xprofile exists:\n  export GTK_THEME=Arc-Dark" in text
        assert "EDITOR" not in text
        assert "- **gtk-theme**: 'Arc-Dark'" in text
        assert "- **color-scheme**: Key not found" in text

    def test_gtk_settings_and_environment_d(self, report, fake_system, fake_home):
        gtk3 = fake_home / ".config" / "gtk-3.0"
        gtk3.mkdir(parents=True)
        (gtk3 / "settings.ini").write_text("[Settings]\ngtk-theme-name=Arc-Dark\n")
        env_d = fake_home / ".config" / "environment.d"
        env_d.mkdir(parents=True)
        (env_d / "90-theme.conf").write_text("QT_QPA_PLATFORMTHEME=qt5ct\n")

        MODULES["theme"](report)

        text = report.path.read_text()
        assert "## ~/.config/gtk-3.0/settings.ini" in text
        assert "gtk-theme-name=Arc-Dark" in text
        assert "## ~/.config/gtk-4.0/settings.ini" not in text
        assert "## environment.d: 90-theme.conf" in text

    def test_theme_packages_exclude_libraries(self, report, fake_system):
        fake_system.add("pacman -Q", "arc-gtk-theme 20221218-1\nlibadwaita 1:1.5.0-1\nkvantum 1.1.1-1\nvim 9.1-1")

        MODULES["theme"](report)

        text = report.path.read_text()
        assert "arc-gtk-theme 20221218-1" in text
        assert "kvantum 1.1.1-1" in text
        assert "libadwaita" not in text


class TestSummary:

    @pytest.mark.parametrize("size,expected", [
        (512, "512B"),
        (2048, "2.0K"),
        (5 * 1024 * 1024, "5.0M"),
        (3 * 1024 ** 3, "3.0G"),
    ])
    def test_human_size(self, size, expected):
        assert human_size(size) == expected

    def test_quick_facts(self, report, fake_system, monkeypatch):
        monkeypatch.setenv("SHELL", "/usr/bin/fish")
        monkeypatch.setenv("XDG_CURRENT_DESKTOP", "KDE")
        monkeypatch.delenv("XDG_SESSION_TYPE", raising=False)
        fake_system.add("uptime -p", "up 2 hours, 5 minutes")
        fake_system.add("pacman -Q", "a 1\nb 1\nc 1")
        fake_system.add("pacman -Qe", "a 1")

        write_summary(report, now=NOW)

        text = report.path.read_text()
        assert "# System Summary" in text
        assert "- **Uptime**: up 2 hours, 5 minutes" in text
        assert "- **Package Count**: 3 total, 1 explicit" in text
        assert "- **Shell**: fish" in text
        assert "- **Desktop**: KDE" in text
        assert "- **Session**: Not set" in text
        assert "## Context File Info" in text
        assert f"- **Location**: {report.path}" in text

    def test_unknown_package_count_without_pacman(self, report, fake_system):
        fake_system.missing.add("pacman")

        write_summary(report, now=NOW)

        assert "- **Package Count**: unknown" in report.path.read_text()

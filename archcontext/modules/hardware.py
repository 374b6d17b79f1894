"""Hardware: kernel, CPU, memory, disks, PCI components and GPU."""

from ..report import Report

CPU_FIELDS = r"Model name:|CPU family:|CPU\(s\):|Thread\(s\)|Core\(s\)|Socket\(s\):"
PCI_CLASSES = r"VGA|Audio|Network"


def collect(report: Report) -> None:
    report.heading(1, "Hardware & System Information")

    report.command_section("Kernel Information", ["uname", "-a"])
    report.command_section("CPU Information", ["lscpu"], pattern=CPU_FIELDS)
    report.command_section("Memory Information", ["free", "-h"])
    report.command_section("Disk Layout", ["lsblk", "-o", "NAME,SIZE,TYPE,MOUNTPOINT,FSTYPE"])
    report.command_section(
        "Disk Usage",
        ["df", "-h", "-t", "ext4", "-t", "btrfs", "-t", "xfs", "-t", "vfat"],
    )
    pci = report.command_section("Key Hardware Components", ["lspci"], pattern=PCI_CLASSES)

    if pci is None or not pci.ok:
        return

    # GPU vendor is taken from the unfiltered lspci output
    if "NVIDIA" in pci.output:
        report.command_section(
            "NVIDIA GPU Info",
            ["nvidia-smi", "--query-gpu=name,driver_version,memory.total", "--format=csv,noheader"],
        )
    elif "AMD" in pci.output:
        report.command_section(
            "AMD GPU Info",
            ["glxinfo"],
            pattern=r"OpenGL renderer|OpenGL version",
        )

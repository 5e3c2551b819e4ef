"""Information about the system for the settings "About" page."""

from __future__ import annotations

import os
import socket
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import psutil

DMI_DIR = "/sys/devices/virtual/dmi/id/"
BOARD_NAME = DMI_DIR + "board_name"
BOARD_VERSION = DMI_DIR + "board_version"
SYS_VENDOR = DMI_DIR + "sys_vendor"

ARCH_PATH = "/proc/sys/kernel/arch"
OS_RELEASE = "/etc/os-release"
CPUINFO = "/proc/cpuinfo"

VERSION_IGNORING_PRODUCTS = ("Dev One",)

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def _capitalize_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def _parse_graphics(lspci_output: str) -> list[str]:
    graphics = []
    for line in lspci_output.splitlines():
        pos = line.find("VGA")
        if pos == -1:
            continue
        rest = line[pos + 3:]
        sep = rest.find(": ")
        if sep != -1:
            graphics.append(rest[sep + 2:])
    return graphics


def _total_disk_capacity() -> int:
    total = 0
    for partition in psutil.disk_partitions():
        try:
            total += psutil.disk_usage(partition.mountpoint).total
        except OSError:
            continue
    return total


@dataclass
class Info:
    """Hardware and software details of the running system."""

    desktop_environment: str = ""
    device_name: str = ""
    disk_capacity: str = ""
    graphics: list[str] = field(default_factory=list)
    hardware_model: str = ""
    memory: str = ""
    operating_system: str = ""
    os_architecture: str = ""
    processor: str = ""
    windowing_system: str = ""

    @classmethod
    def load(cls) -> "Info":
        """Gather information from the running system."""
        info = cls(
            os_architecture=architecture(),
            hardware_model=hardware_model(),
            operating_system=operating_system(),
            processor=processor_name(),
            disk_capacity=format_size(_total_disk_capacity()),
            memory=format_size(psutil.virtual_memory().total),
        )

        host_name = socket.gethostname()
        if host_name:
            info.device_name = host_name

        session_type = os.environ.get("XDG_SESSION_TYPE")
        if session_type is not None:
            info.windowing_system = _capitalize_first(session_type)

        desktop = os.environ.get("DESKTOP_SESSION")
        if desktop is not None:
            info.desktop_environment = _capitalize_first(desktop)

        try:
            result = subprocess.run(["lspci"], capture_output=True, check=False)
        except OSError:
            result = None
        if result is not None:
            try:
                info.graphics = _parse_graphics(result.stdout.decode("utf-8"))
            except UnicodeDecodeError:
                pass

        return info


def read_to_string(path: Union[str, os.PathLike]) -> Optional[str]:
    """The file's contents as UTF-8 text, or None if it cannot be read."""
    try:
        return Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def architecture() -> str:
    """The kernel's architecture name, or an empty string."""
    value = read_to_string(ARCH_PATH)
    return "" if value is None else value.strip()


def hardware_model(
    sys_vendor_path: Union[str, os.PathLike] = SYS_VENDOR,
    board_name_path: Union[str, os.PathLike] = BOARD_NAME,
    board_version_path: Union[str, os.PathLike] = BOARD_VERSION,
) -> str:
    """Vendor, board name and board version, as one description."""
    sys_vendor = read_to_string(sys_vendor_path)
    if sys_vendor is None:
        return ""
    sys_vendor = sys_vendor.strip()
    model = sys_vendor

    name = read_to_string(board_name_path)
    if name is None:
        return model
    name = name.strip()

    if name and name != sys_vendor:
        if name.startswith(sys_vendor):
            name = name[len(sys_vendor):].strip()
        model += " " + name

    version = read_to_string(board_version_path)
    if version is not None:
        version = version.strip()
        if version and name not in VERSION_IGNORING_PRODUCTS:
            model += f" ({version})"

    return model


def operating_system(path: Union[str, os.PathLike] = OS_RELEASE) -> str:
    """The PRETTY_NAME from an os-release file, or an empty string."""
    os_release = read_to_string(path)
    if os_release is None:
        return ""
    for line in os_release.splitlines():
        if line.startswith("PRETTY_NAME="):
            value = line[len("PRETTY_NAME="):]
            if value.startswith('"'):
                value = value[1:]
            if value.endswith('"'):
                value = value[:-1]
            return value.strip()
    return ""


def processor_name(path: Union[str, os.PathLike] = CPUINFO) -> str:
    """The first "model name" from a cpuinfo file, or an empty string."""
    cpuinfo = read_to_string(path)
    if cpuinfo is None:
        return ""
    for line in cpuinfo.splitlines():
        if line.startswith("model name"):
            rest = line[len("model name"):].lstrip()
            return rest[1:].strip() if rest.startswith(":") else ""
    return ""


def format_size(size: int) -> str:
    """Format a byte count with binary units and two decimals."""
    value = float(size)
    unit = _UNITS[0]
    for next_unit in _UNITS[1:]:
        if value < 1024:
            break
        value /= 1024
        unit = next_unit
    return f"{value:.2f} {unit}"
from __future__ import annotations

from ..config.loader import DevicesConfig
from ..errors import InvalidValueError
from ..models.record import Record
from ..models.reports import DeviceReport
from ..models.row_data import RowData
from .reducers import validate_ip

"""Device config generator: name / ip / active flag -> fixed config template."""

__all__ = [
    "parse_active",
    "device_from_row",
    "generate_config",
    "analyze_device",
]

_ACTIVE_WORDS = {"yes", "true", "1"}


def parse_active(raw: object) -> bool:
    """Anything outside the accepted "yes" words counts as inactive."""
    return str(raw).strip().lower() in _ACTIVE_WORDS


def device_from_row(row: RowData) -> Record:
    """Build a device Record from ``name`` / ``ip`` / ``active`` values.

    Raises:
        InvalidValueError: If the name is empty or the IP fails the format check
    """
    name = str(row.values.get("name") or "").strip()
    ip = str(row.values.get("ip") or "").strip()
    if not name:
        raise InvalidValueError("device name is empty")
    if not validate_ip(ip):
        raise InvalidValueError(f"invalid IP format: {ip!r}")
    return Record(name=name, active=parse_active(row.values.get("active", "")), fields={"ip": ip})


def generate_config(
    name: str,
    ip: str,
    active: bool,
    *,
    interface: str = "eth0",
    prefix_length: int = 24,
    enable_secret: str = "admin123",
) -> list[str]:
    lines = [
        f"hostname {name}",
        f"interface {interface}",
        f"  ip address {ip}/{prefix_length}",
        "  no shutdown",
        f"enable secret {enable_secret}",
        "line vty 0 4",
        "  login local",
        "  transport input ssh",
    ]
    if not active:
        lines.append("shutdown")
    return lines


def analyze_device(record: Record, config: DevicesConfig) -> DeviceReport:
    ip = record.get_field("ip")
    active = bool(record.active)
    return DeviceReport(
        name=record.name,
        ip=ip,
        active=active,
        config_lines=tuple(
            generate_config(
                record.name,
                ip,
                active,
                interface=config.interface,
                prefix_length=config.prefix_length,
                enable_secret=config.enable_secret,
            )
        ),
    )

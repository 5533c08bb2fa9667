from __future__ import annotations

DEVICE_COMPATIBLE = "/sys/firmware/devicetree/base/compatible"


def read_device_info(path: str = DEVICE_COMPATIBLE) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            raw = f.read()
    except OSError:
        return "Unknown"
    parts = [p.strip() for p in raw.split("\0") if p.strip()]
    return ", ".join(parts) if parts else "Unknown"

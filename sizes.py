"""Human readable byte counts."""

import math

BINARY_UNITS = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
SI_UNITS = ("kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def _round_half_up(value: float, decimal_places: int) -> float:
    scale = 10**decimal_places
    return math.floor(value * scale + 0.5) / scale


def human_file_size(num_bytes: int, si: bool = False, decimal_places: int = 1) -> str:
    """Format ``num_bytes`` as e.g. ``"1.5 KiB"`` (or ``"1.5 kB"`` with ``si``)."""
    threshold = 1000 if si else 1024
    if abs(num_bytes) < threshold:
        return f"{num_bytes} B"

    units = SI_UNITS if si else BINARY_UNITS
    value = float(num_bytes)
    unit_index = -1
    while True:
        value /= threshold
        unit_index += 1
        if _round_half_up(abs(value), decimal_places) < threshold:
            break
        if unit_index >= len(units) - 1:
            break
    rounded = math.copysign(_round_half_up(abs(value), decimal_places), value)
    return f"{rounded:.{decimal_places}f} {units[unit_index]}"

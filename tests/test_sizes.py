"""Unit tests for human readable size formatting."""

import pytest

from sizes import human_file_size


@pytest.mark.parametrize("num_bytes", [0, 1, 512, 1023, -1023])
def test_small_values_are_plain_bytes(num_bytes: int) -> None:
    assert human_file_size(num_bytes) == f"{num_bytes} B"


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (1_048_575, "1.0 MiB"),
        (1_048_576, "1.0 MiB"),
        (5 * 1024**3, "5.0 GiB"),
        (1024**9, "1024.0 YiB"),
    ],
)
def test_binary_units(num_bytes: int, expected: str) -> None:
    assert human_file_size(num_bytes) == expected


def test_si_units() -> None:
    assert human_file_size(999, si=True) == "999 B"
    assert human_file_size(1000, si=True) == "1.0 kB"
    assert human_file_size(1_500_000, si=True) == "1.5 MB"


def test_decimal_places() -> None:
    assert human_file_size(1536, decimal_places=2) == "1.50 KiB"
    assert human_file_size(1536, decimal_places=0) == "2 KiB"


@pytest.mark.parametrize(
    ("num_bytes", "decimal_places", "expected"),
    [
        (1280, 1, "1.3 KiB"),
        (2304, 1, "2.3 KiB"),
        (1792, 1, "1.8 KiB"),
        (2560, 0, "3 KiB"),
        (-1280, 1, "-1.3 KiB"),
    ],
)
def test_ties_round_half_up(num_bytes: int, decimal_places: int, expected: str) -> None:
    assert human_file_size(num_bytes, decimal_places=decimal_places) == expected

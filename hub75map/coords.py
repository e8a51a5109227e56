"""Coordinate mapping from a virtual canvas onto a chain of HUB75 panels."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class VirtualCoords:
    """A pixel position, optionally tagged with a module row and column."""

    x: int = 0
    y: int = 0
    virt_row: int = 0
    virt_col: int = 0


class ScanType(Enum):
    """How a physical panel multiplexes its rows."""

    STANDARD_TWO_SCAN = 0
    FOUR_SCAN_16PX_HIGH = 1
    FOUR_SCAN_32PX_HIGH = 2
    FOUR_SCAN_40PX_HIGH = 3
    FOUR_SCAN_40_80PX_HFARCAN = 4
    FOUR_SCAN_64PX_HIGH = 5


class ChainType(Enum):
    """How panels are cabled together, seen from the LED side."""

    NONE = 0
    TOP_LEFT_DOWN = 1
    TOP_RIGHT_DOWN = 2
    BOTTOM_LEFT_UP = 3
    BOTTOM_RIGHT_UP = 4
    TOP_LEFT_DOWN_ZZ = 5
    TOP_RIGHT_DOWN_ZZ = 6
    BOTTOM_RIGHT_UP_ZZ = 7
    BOTTOM_LEFT_UP_ZZ = 8


@dataclass(frozen=True)
class PanelLayout:
    """A grid of identical panels forming one virtual display."""

    rows: int
    cols: int
    panel_res_x: int
    panel_res_y: int

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "panel_res_x", "panel_res_y"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def virtual_res_x(self) -> int:
        return self.cols * self.panel_res_x

    @property
    def virtual_res_y(self) -> int:
        return self.rows * self.panel_res_y

    @property
    def dma_width(self) -> int:
        """Width of the single chain as the DMA engine sees it."""
        return self.panel_res_x * self.rows * self.cols


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _tmod(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


def map_chain(chain_type: ChainType, layout: PanelLayout, virt_x: int, virt_y: int) -> VirtualCoords:
    """Map a virtual pixel to its position on the single physical chain."""
    chain_type = ChainType(chain_type)
    if chain_type is ChainType.NONE:
        return VirtualCoords(virt_x, virt_y)

    rows = layout.rows
    vres_x = layout.virtual_res_x
    last_dma_x = layout.dma_width - 1
    local_y = _tmod(virt_y, layout.panel_res_y)
    row = _tdiv(virt_y, layout.panel_res_y)

    def upright(r: int) -> VirtualCoords:
        return VirtualCoords((rows - (r + 1)) * vres_x + virt_x, local_y)

    def inverted(r: int) -> VirtualCoords:
        return VirtualCoords(last_dma_x - virt_x - r * vres_x, layout.panel_res_y - 1 - local_y)

    odd = (row & 1) == 1
    if chain_type is ChainType.TOP_RIGHT_DOWN:
        return inverted(row) if odd else upright(row)
    if chain_type is ChainType.TOP_LEFT_DOWN:
        return upright(row) if odd else inverted(row)
    if chain_type in (ChainType.TOP_RIGHT_DOWN_ZZ, ChainType.TOP_LEFT_DOWN_ZZ):
        return upright(row)

    row = rows - row - 1
    odd = (row & 1) == 1
    if chain_type is ChainType.BOTTOM_LEFT_UP:
        return upright(row) if odd else inverted(row)
    if chain_type is ChainType.BOTTOM_RIGHT_UP:
        return inverted(row) if odd else upright(row)
    # BOTTOM_LEFT_UP_ZZ and BOTTOM_RIGHT_UP_ZZ
    return upright(row)


def _interleave(x: int, base: int, first_block: bool) -> int:
    block = _tdiv(x, base)
    return x + (block + 1) * base if first_block else x + block * base


def map_scan_type(coords: VirtualCoords, scan_type: ScanType, virt_y: int, pixel_base: int) -> VirtualCoords:
    """Remap chain coordinates for panels that do not use plain two-scan output."""
    scan_type = ScanType(scan_type)
    x, y = coords.x, coords.y

    if scan_type is ScanType.FOUR_SCAN_16PX_HIGH:
        x = _interleave(x, pixel_base, (y & 4) == 0)
        y = (y >> 3) * 4 + (y & 0b11)
    elif scan_type is ScanType.FOUR_SCAN_40PX_HIGH:
        x = _interleave(x, pixel_base, _tmod(_tdiv(y, 10), 2) == 0)
        y = _tdiv(y, 20) * 10 + _tmod(y, 10)
    elif scan_type is ScanType.FOUR_SCAN_40_80PX_HFARCAN:
        base = 16
        panel_local_x = _tmod(x, 80)
        odd = _tmod(_tdiv(y, 10), 2) ^ _tmod(_tdiv(panel_local_x, base), 2)
        x = _interleave(x, base, not odd)
        y = _tmod(y, 10) + 10 * _tmod(_tdiv(y, 20), 2)
    elif scan_type in (ScanType.FOUR_SCAN_32PX_HIGH, ScanType.FOUR_SCAN_64PX_HIGH):
        adjusted_y = virt_y
        if scan_type is ScanType.FOUR_SCAN_64PX_HIGH and (virt_y & 8) != ((virt_y & 16) >> 1):
            adjusted_y = ((virt_y & 0b11000) ^ 0b11000) + (virt_y & 0b11100111)
        x = _interleave(x, pixel_base, (y & 8) == 0)
        y = (adjusted_y >> 4) * 8 + (adjusted_y & 0b111)
    else:
        return coords

    return dataclasses.replace(coords, x=x, y=y)
"""Interval tables and their composition."""

from range_remap.mapping.interval import MAX_VALUE, Interval
from range_remap.mapping.table import RangeMap, compose


__all__ = ["MAX_VALUE", "Interval", "RangeMap", "compose"]

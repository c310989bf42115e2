"""Extent tracking and map-to-canvas projection."""

from pysotamap.geometry.extents import Extent, ExtentTracker
from pysotamap.geometry.projector import MapProjector

__all__ = ["Extent", "ExtentTracker", "MapProjector"]

"""Sectioned list geometry."""

from listwindow.geometry.index import GeometryIndex, HeightProvider, Row, SectionEntry, SectionStart

__all__ = ["GeometryIndex", "HeightProvider", "Row", "SectionEntry", "SectionStart"]

"""LULC planning decision engine: land-change analytics for district planning."""

__version__ = "0.1.0"

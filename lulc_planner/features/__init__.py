"""Derived time-series and transition metrics: trends, velocity, trust, evolution."""

"""
Atlas Life Quoting Engine

This package provides life insurance premium quoting using:
- A deterministic pricing pipeline (health, underwriting, rates, riders)
- A bisection solver for death benefit from a target premium
- Bronze/Silver/Gold plan recommendations
"""

__version__ = "1.0.0"

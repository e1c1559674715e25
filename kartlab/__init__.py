"""
Kart Frustration Lab

Batch scoring of per-frame kart racing telemetry into per-session frustration
indicators, used to compare tracks and difficulty settings.
"""

__version__ = "0.1.0"

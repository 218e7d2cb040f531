"""
Golden Hour Engine Application Package.

A photography timing service featuring:
- Solar position from the NOAA equations (via astral)
- Sunrise, sunset and solar noon per civil day in any IANA timezone
- Golden hour and blue hour windows from sun altitude thresholds
- Live countdown to the current or next lighting window
"""

__version__ = "1.0.0"

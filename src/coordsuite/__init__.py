"""
Coordinates Suite - UTM and latitude/longitude conversion for pasted coordinate lists.

This package detects the format of raw coordinate text, parses it line by
line and converts each point between UTM and geographic coordinates using
a Transverse Mercator projection.
"""

__version__ = "0.1.0"

"""
Web dashboard: HTML pages plus JSON endpoints proxying the collector, the
JWST API and AstronomyAPI.
"""

"""
Core helpers shared by the web app, the collector and the fetchers.
"""

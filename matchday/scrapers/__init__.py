"""
API clients for external football data sources.
"""

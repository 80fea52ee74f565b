"""
Matchday - follow football fixtures, standings and scorers from football-data.org.

Core components:
- scrapers.football_data: paced async client for the football-data.org v4 API
- services.selection_store: persisted set of followed teams and competitions
- services.schedule_service: match classification, merging and date grouping
"""

__version__ = "1.0.0"

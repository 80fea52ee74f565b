"""
football-data.org API constants.
"""

BASE_URL = "https://api.football-data.org/v4"

# Sent when no API key is configured; the server answers 403.
PLACEHOLDER_API_KEY = "YOUR_API_KEY"

# Free plan allows ~10 requests/minute
MIN_REQUEST_INTERVAL = 6.5

CONNECT_TIMEOUT = 30.0
TOTAL_TIMEOUT = 60.0

DEFAULT_SCORERS_LIMIT = 20
DEFAULT_TEAM_MATCHES_LIMIT = 50

# Competition codes available on the free plan
FREE_TIER_CODES = (
    'PL', 'BL1', 'PD', 'SA', 'FL1', 'ELC',
    'DED', 'PPL', 'BSA', 'CL', 'WC', 'EC',
)

# Display names for CLI output
COMPETITION_NAMES = {
    'PL': 'Premier League',
    'BL1': 'Bundesliga',
    'PD': 'Primera Division',
    'SA': 'Serie A',
    'FL1': 'Ligue 1',
    'ELC': 'Championship',
    'DED': 'Eredivisie',
    'PPL': 'Primeira Liga',
    'BSA': 'Campeonato Brasileiro Série A',
    'CL': 'UEFA Champions League',
    'WC': 'FIFA World Cup',
    'EC': 'European Championship',
}

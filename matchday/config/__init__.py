from .settings import Config, FREE_TIER_CODES

__all__ = ['Config', 'FREE_TIER_CODES']

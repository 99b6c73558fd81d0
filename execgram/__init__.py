"""
execgram - Telegram helpers for gateway exec approvals
"""

__version__ = "0.1.0"
__logo__ = "🔒"

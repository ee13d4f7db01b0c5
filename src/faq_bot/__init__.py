"""
FAQ bot: answers free-text questions from a question/answer knowledge bank.
"""
from .app import FaqBotApp
from .config import FaqBotConfig
from .config_loader import load_config_from_env
from .schemas import MatchSource, ResolutionResult

__all__ = [
    "FaqBotApp",
    "FaqBotConfig",
    "load_config_from_env",
    "MatchSource",
    "ResolutionResult",
]

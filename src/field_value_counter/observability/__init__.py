from .logging import LEVELS, LogMessage, level_enabled, log_to_dict

__all__ = ["LEVELS", "LogMessage", "level_enabled", "log_to_dict"]

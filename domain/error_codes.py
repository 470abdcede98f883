"""
Stable codes carried by ConfigError.

The service layer re-exports these from services.error_codes.
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Settings errors
SETTINGS_MISSING = "settings_missing"
INVALID_SETTINGS = "invalid_settings"

# Generation request errors
INVALID_METHOD = "invalid_method"
INVALID_CONFIG = "invalid_config"
INSUFFICIENT_PLAYERS = "insufficient_players"
NO_PLAYERS = "no_players"
DUPLICATE_PLAYERS = "duplicate_players"

# Teammate history errors
INVALID_HISTORY = "invalid_history"

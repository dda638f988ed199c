"""
Shared constants for the inline editing system.
"""

# Shown when the path cannot be built or the patch is refused
UPDATE_FAILED_MESSAGE = "Failed to update JSON"

# Fallback when the coercer gives no message
INVALID_VALUE_MESSAGE = "Invalid value"

# Keys handled by the row editor input
COMMIT_KEY = 'Enter'
CANCEL_KEY = 'Escape'

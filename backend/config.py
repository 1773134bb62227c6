"""
Single place for default roll/host configuration.
Environment-driven settings (DATABASE_URL, ROLL_SEED) are read where they are used.
"""
# Name given to an assist row left blank in the roll dialog.
DEFAULT_ASSIST_NAME = "Assist"

# Max rows returned by GET /rolls, regardless of the requested limit.
ROLL_HISTORY_LIMIT = 50

"""Configuration constants for the PixelVault arcade engine."""

# Canvas geometry (logical pixels)
CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400

# Particle field
PARTICLE_COUNT = 50
PARTICLE_MAX_SPEED = 1.0      # per reference frame, each axis
REFERENCE_FRAME_MS = 1000.0 / 60.0

# Hashlord
SESSION_LABEL = "PVX_Block"
DEFAULT_DIFFICULTY = 2
MAX_UI_DIFFICULTY = 5         # the host UI caps its difficulty selector here

# Reward balance
SCORE_NUMERATOR = 1000
SCORE_ATTEMPT_WEIGHT = 0.5
SCORE_TIME_SCALE = 60
SCORE_MIN_SECONDS = 10
BASE_REWARD_PER_DIFFICULTY = 50
PENALTY_ATTEMPT_SPAN = 50
PENALTY_RATE = 0.5
MAX_ATTEMPT_PENALTY = 0.8

# Auto-miner
NONCES_PER_FRAME = 64
STATS_INTERVAL = 5.0          # seconds between nonce rate reports

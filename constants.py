# constants.py
"""
Application-level constants.

These values are static and do not change between generation runs.
They are the fixed physics and sampling settings of each generator,
as opposed to the experimental configuration (sizes, counts, seeds)
that is read from config.json.
"""

# Random stream settings
# Mixed into a millisecond timestamp when no explicit seed is given.
SEED_MIX = 0x9E3779B9
# Multiplier of the multiply-xorshift-add transform.
STREAM_MULTIPLIER = 48271
STREAM_INCREMENT = 0x7FFFFFFF
UINT32_MASK = 0xFFFFFFFF
UINT32_RANGE = 4294967296.0

# Noise settings
DEFAULT_NOISE_FREQ = 6
DEFAULT_NOISE_AMP = 1.0

# --- Particle Simulation ---
FRAME_COUNT = 120
TIME_STEP = 0.5
# Velocity is multiplied by this factor on both axes after integration.
DAMPING = 0.98
# Strength of the flow field vector added to the velocity each frame.
FLOW_STRENGTH = 0.5
# Probability, per particle and frame, of a random velocity kick.
KICK_PROBABILITY = 0.002
KICK_STRENGTH = 4.0
# Initial velocity components are drawn from [-1, 1).
VELOCITY_SPREAD = 2.0
# Lifetime is 30 + floor(next() * 600) frames.
MIN_LIFETIME = 30
LIFETIME_SPREAD = 600
# Radius is 0.5 + next() * 3.
MIN_PARTICLE_SIZE = 0.5
PARTICLE_SIZE_SPREAD = 3.0
COLOR_CHANNEL_RANGE = 255
# Particle ids carry a random suffix below this bound.
ID_SUFFIX_RANGE = 1e9

# --- Cellular Automaton ---
ALIVE_PROBABILITY = 0.45
NEIGHBORHOOD_SIZE = 9
RULE_TABLE_SIZE = 1 << NEIGHBORHOOD_SIZE

# --- Palette ---
HUE_RANGE = 360
MIN_SATURATION = 40
SATURATION_SPREAD = 60
MIN_LIGHTNESS = 20
LIGHTNESS_SPREAD = 60

"""Normalised velocity constants.

Velocities in a note list are expressed as 0.0-1.0 rather than raw MIDI
0-127. Boosts produced by the compiler are added to these values and
clamped against ``MAX_VELOCITY`` by whatever applies them.
"""

DEFAULT_VELOCITY = 0.8          # Reference velocity when a note carries none

MIN_VELOCITY = 0.0
MAX_VELOCITY = 1.0

# Scale used when converting to MIDI velocity bytes
MIDI_MAX_VELOCITY = 127

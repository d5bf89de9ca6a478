"""Constants for articulate.

This package contains three sets of constants:

- ``articulate.constants.durations`` - Quarter-note grid sizes for quantization
- ``articulate.constants.velocity`` - Normalised (0.0-1.0) velocity constants
- ``articulate.constants.articulations`` - Recognised articulations and their default coefficients
"""

# MIDI pitch range shared by notes and glide targets.

MIN_PITCH = 0
MAX_PITCH = 127

"""Quarter-note grid sizes for timing quantization.

All values are in **quarter notes**, where 1.0 = one quarter note. Pass these
as the ``grid`` argument of the quantizer::

    import articulate.constants.durations as dur
    import articulate.quantize

    articulate.quantize.quantize(1.13, grid=dur.SIXTEENTH)     # 1.25
    articulate.quantize.quantize(1.13, grid=dur.EIGHTH, mode="floor")   # 1.0
"""

THIRTYSECOND = 0.125
SIXTEENTH = 0.25
TRIPLET_EIGHTH = 1 / 3
EIGHTH = 0.5
QUARTER = 1.0
HALF = 2.0
WHOLE = 4.0

DEFAULT_GRID = SIXTEENTH

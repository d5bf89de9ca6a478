"""Recognised articulations and their default coefficients.

Simple articulations are plain names (``"staccato"``). Complex ones are
mappings with a ``type`` and parameters (``{"type": "glissando", "target": 67}``).
"""

import typing


STACCATO_DURATION_FACTOR = 0.5
STACCATISSIMO_DURATION_FACTOR = 0.25
TENUTO_DURATION_FACTOR = 1.5
TENUTO_VELOCITY_FACTOR = 1.3
ACCENT_VELOCITY_FACTOR = 2.0

# Smallest combined duration factor the resolver will emit
MIN_DURATION_FACTOR = 1e-3

# Renderers discretizing a glide use at least this many steps
GLIDE_MIN_STEPS = 3

GLIDE_CURVES = ("linear", "exponential", "ease_in_out")


SIMPLE_ARTICULATIONS: typing.Dict[str, str] = {
	"staccato":      "Shortens note duration to 50%",
	"staccatissimo": "Shortens note duration to 25%",
	"accent":        "Increases note velocity",
	"tenuto":        "Holds the note longer with slight emphasis",
	"marcato":       "Strong accent: accent and tenuto combined",
	"legato":        "Smooth connection between notes (phrasing only)",
}


COMPLEX_ARTICULATIONS: typing.Dict[str, typing.Dict[str, typing.Any]] = {
	"glissando": {
		"description": "Smooth slide from the note to a target pitch",
		"required": ("target",),
		"optional": ("curve",),
	},
	"portamento": {
		"description": "Expressive slide between pitches",
		"required": ("target",),
		"optional": ("curve",),
	},
}

"""Compiled modulation events.

Each event describes one performance effect on one note, addressed by the
note's position in the track (``index``). ``to_dict()`` gives the wire form
consumed by downstream emitters::

    {"type": "durationScale", "index": 0, "factor": 0.5, "start": 0, "end": 1}
    {"type": "velocityBoost", "index": 0, "amountBoost": 0.8, "start": 0, "end": 1}
    {"type": "pitch", "index": 1, "subtype": "glissando", "from": 64, "to": 67,
     "curve": "linear", "start": 1, "end": 2}
"""

import dataclasses
import typing


DURATION_SCALE = "durationScale"
VELOCITY_BOOST = "velocityBoost"
PITCH = "pitch"

# Per-note emission order
EVENT_TYPE_ORDER: typing.Tuple[str, ...] = (DURATION_SCALE, VELOCITY_BOOST, PITCH)


@dataclasses.dataclass(frozen=True)
class DurationScale:

	"""Scale the note's sounding duration by ``factor``."""

	index: int
	factor: float
	start: float = 0.0
	end: float = 0.0

	type: typing.ClassVar[str] = DURATION_SCALE

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {"type": self.type, "index": self.index, "factor": self.factor, "start": self.start, "end": self.end}


@dataclasses.dataclass(frozen=True)
class VelocityBoost:

	"""Add ``amount_boost`` to the note's velocity before clamping."""

	index: int
	amount_boost: float
	start: float = 0.0
	end: float = 0.0

	type: typing.ClassVar[str] = VELOCITY_BOOST

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {"type": self.type, "index": self.index, "amountBoost": self.amount_boost, "start": self.start, "end": self.end}


@dataclasses.dataclass(frozen=True)
class PitchGlide:

	"""
	A continuous pitch transition across the note.

	Only the endpoints are described; renderers choose how finely to
	discretize the glide.
	"""

	index: int
	subtype: str
	from_pitch: int
	to_pitch: int
	curve: str = "linear"
	start: float = 0.0
	end: float = 0.0

	type: typing.ClassVar[str] = PITCH

	@property
	def span (self) -> int:
		return self.to_pitch - self.from_pitch

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {
			"type": self.type,
			"index": self.index,
			"subtype": self.subtype,
			"from": self.from_pitch,
			"to": self.to_pitch,
			"curve": self.curve,
			"start": self.start,
			"end": self.end,
		}


ModulationEvent = typing.Union[DurationScale, VelocityBoost, PitchGlide]

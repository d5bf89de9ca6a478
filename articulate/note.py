"""Note model consumed by the compiler and the renderer helpers.

Notes usually arrive as JSON-shaped mappings::

    {"pitch": 60, "duration": 1, "time": 0, "articulations": ["staccato"]}

``Note.from_mapping()`` is the single place where such a mapping is checked
and turned into a typed value. Both camelCase and snake_case keys are
accepted for the legacy glissando target.
"""

import collections.abc
import dataclasses
import math
import numbers
import typing

import articulate.constants


PitchType = typing.Union[int, typing.Tuple[int, ...], None]


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	A single note, chord, or rest.

	``pitch`` is a MIDI note number, a tuple of note numbers for a chord, or
	``None`` for a rest. ``time`` and ``duration`` are in quarter notes.
	``articulations`` holds the raw, un-normalised articulation data.
	"""

	pitch: PitchType
	duration: float
	time: float = 0.0
	articulations: typing.Any = None
	articulation: typing.Optional[str] = None
	gliss_target: typing.Any = None
	velocity: typing.Optional[float] = None
	dynamics: typing.Optional[str] = None

	@property
	def is_rest (self) -> bool:
		return self.pitch is None

	@property
	def main_pitch (self) -> typing.Optional[int]:

		"""The representative pitch for glides: the lowest pitch of a chord."""

		if self.pitch is None:
			return None
		if isinstance(self.pitch, tuple):
			return min(self.pitch) if self.pitch else None
		return self.pitch

	@property
	def end (self) -> float:
		return self.time + self.duration

	@classmethod
	def from_mapping (cls, data: typing.Mapping[str, typing.Any], index: int = 0) -> "Note":

		"""
		Validate a note mapping and build a ``Note``.

		Raises ``TypeError`` or ``ValueError`` with the note's index when the
		mapping is not a well-formed note. Articulation data is carried
		through untouched; it is checked later, per entry, by the normalizer.
		"""

		if not isinstance(data, collections.abc.Mapping):
			raise TypeError(f"Note at index {index} must be a mapping, got {type(data).__name__}")

		if "duration" not in data:
			raise ValueError(f"Note at index {index} has no duration")

		gliss_target = data.get("glissTarget", data.get("gliss_target"))

		return cls(
			pitch = _check_pitch(data.get("pitch"), index),
			duration = _check_duration(data["duration"], index),
			time = _check_time(data.get("time", 0.0), index),
			articulations = data.get("articulations"),
			articulation = data.get("articulation"),
			gliss_target = gliss_target,
			velocity = data.get("velocity"),
			dynamics = data.get("dynamics"),
		)


def coerce_note (value: typing.Any, index: int = 0) -> Note:

	"""Return *value* as a ``Note``, converting mappings and validating either form."""

	if isinstance(value, Note):
		pitch = _check_pitch(value.pitch, index)
		_check_duration(value.duration, index)
		_check_time(value.time, index)
		if pitch != value.pitch:
			return dataclasses.replace(value, pitch=pitch)
		return value

	if isinstance(value, collections.abc.Mapping):
		return Note.from_mapping(value, index)

	raise TypeError(f"Note at index {index} must be a mapping or Note, got {type(value).__name__}")


def _is_number (value: typing.Any) -> bool:

	return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _check_single_pitch (value: typing.Any, index: int) -> int:

	if isinstance(value, bool) or not isinstance(value, numbers.Integral):
		raise TypeError(f"Note at index {index} has a non-integer pitch: {value!r}")

	if not articulate.constants.MIN_PITCH <= value <= articulate.constants.MAX_PITCH:
		raise ValueError(f"Note at index {index} has pitch {value} outside 0-127")

	return int(value)


def _check_pitch (value: typing.Any, index: int) -> PitchType:

	if value is None:
		return None

	if isinstance(value, (list, tuple)):
		return tuple(_check_single_pitch(p, index) for p in value)

	return _check_single_pitch(value, index)


def _check_duration (value: typing.Any, index: int) -> float:

	if not _is_number(value):
		raise TypeError(f"Note at index {index} has a non-numeric duration: {value!r}")

	if value <= 0:
		raise ValueError(f"Note at index {index} must have a positive duration, got {value}")

	return value


def _check_time (value: typing.Any, index: int) -> float:

	if not _is_number(value):
		raise TypeError(f"Note at index {index} has a non-numeric time: {value!r}")

	if value < 0:
		raise ValueError(f"Note at index {index} cannot start at a negative time, got {value}")

	return value

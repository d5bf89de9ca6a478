"""Grid quantization for note timing.

All grids are in quarter notes (0.25 = sixteenth). Every function returns
new objects and leaves its input untouched. Values that are not finite
numbers, and collections that are not the expected shape, pass through
unchanged so that partially-formed data can be quantized without raising.

    quantize(1.13)                          # 1.25
    quantize(1.13, grid=0.5, mode="floor")  # 1.0
    quantize_track({"notes": [{"time": 0.1, "duration": 0.9}]})
    encode_abc_duration(2, grid=0.25)       # "2"
"""

import collections.abc
import dataclasses
import fractions
import math
import numbers
import typing

import articulate.constants.durations


MODES = ("nearest", "floor", "ceil")

EPSILON = 1e-9

DEFAULT_FIELDS: typing.Tuple[str, ...] = ("time", "duration")


def quantize (value: typing.Any, grid: float = articulate.constants.durations.DEFAULT_GRID, mode: str = "nearest") -> typing.Any:

	"""
	Snap *value* to a multiple of *grid*.

	Parameters:
		value: Position or duration in quarter notes. Anything that is not
			a finite real number is returned as-is.
		grid: Grid size in quarter notes. Must be positive.
		mode: ``"nearest"`` (halves round up), ``"floor"`` or ``"ceil"``.

	``Fraction`` values on a ``Fraction`` or integer grid stay exact.
	"""

	_check_grid(grid, mode)

	if not _is_finite(value):
		return value

	steps = value / grid

	# Too large to count in grid steps at float precision
	if isinstance(steps, float) and not math.isfinite(steps):
		return value

	# Absorb float error so values already on the grid stay put under floor/ceil
	if isinstance(steps, float) and abs(steps - round(steps)) < EPSILON:
		steps = float(round(steps))

	if mode == "floor":
		count = math.floor(steps)
	elif mode == "ceil":
		count = math.ceil(steps)
	else:
		count = math.floor(steps + fractions.Fraction(1, 2) if isinstance(steps, fractions.Fraction) else steps + 0.5)

	return count * grid


def quantize_events (
	events: typing.Any,
	grid: float = articulate.constants.durations.DEFAULT_GRID,
	fields: typing.Sequence[str] = DEFAULT_FIELDS,
	mode: str = "nearest",
) -> typing.Any:

	"""
	Return a new list with the named numeric fields of each event snapped.

	Mappings are shallow-copied; dataclass instances are rebuilt with
	``dataclasses.replace``. Other fields, other element types, and element
	order are kept exactly. A non-list argument is returned unchanged.
	"""

	_check_grid(grid, mode)

	if not isinstance(events, (list, tuple)):
		return events

	return [_quantize_event(event, grid, fields, mode) for event in events]


def quantize_track (track: typing.Any, grid: float = articulate.constants.durations.DEFAULT_GRID, mode: str = "nearest") -> typing.Any:

	"""Return a copy of *track* with ``time`` and ``duration`` snapped on every note."""

	if not isinstance(track, collections.abc.Mapping) or not isinstance(track.get("notes"), (list, tuple)):
		return track

	quantized = dict(track)
	quantized["notes"] = quantize_events(track["notes"], grid, DEFAULT_FIELDS, mode)
	return quantized


def quantize_composition (composition: typing.Any, grid: float = articulate.constants.durations.DEFAULT_GRID, mode: str = "nearest") -> typing.Any:

	"""Return a copy of *composition* with every track quantized."""

	if not isinstance(composition, collections.abc.Mapping) or not isinstance(composition.get("tracks"), (list, tuple)):
		return composition

	quantized = dict(composition)
	quantized["tracks"] = [quantize_track(track, grid, mode) for track in composition["tracks"]]
	return quantized


def encode_abc_duration (duration_quarters: float, grid: float = articulate.constants.durations.DEFAULT_GRID) -> str:

	"""
	ABC note-length suffix for a duration, with ``L:1/4`` as the unit.

	The duration is first snapped to the grid (halves round up), then
	written relative to a quarter note. One quarter is the empty suffix,
	whole multiples of a quarter are a bare multiplier (``"2"``) and anything
	else a reduced fraction (``"3/2"``, ``"3/4"``). Durations that snap to
	zero or below, and non-finite durations, give ``""``; callers are expected
	not to pass them.
	"""

	_check_grid(grid, "nearest")

	if not _is_finite(duration_quarters):
		return ""

	snapped = quantize(duration_quarters, grid, "nearest")

	if snapped <= 0:
		return ""

	# Float grids such as 1/3 are recovered as the nearest simple fraction
	length = fractions.Fraction(snapped).limit_denominator()

	if length == 1:
		return ""

	if length.denominator == 1:
		return str(length.numerator)

	return f"{length.numerator}/{length.denominator}"


def _quantize_event (event: typing.Any, grid: float, fields: typing.Sequence[str], mode: str) -> typing.Any:

	if isinstance(event, collections.abc.Mapping):
		copy = dict(event)
		for field in fields:
			if field in copy and _is_finite(copy[field]):
				copy[field] = quantize(copy[field], grid, mode)
		return copy

	if dataclasses.is_dataclass(event) and not isinstance(event, type):
		names = {f.name for f in dataclasses.fields(event)}
		changes = {
			field: quantize(getattr(event, field), grid, mode)
			for field in fields
			if field in names and _is_finite(getattr(event, field))
		}
		return dataclasses.replace(event, **changes)

	return event


def _is_finite (value: typing.Any) -> bool:

	return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _check_grid (grid: float, mode: str) -> None:

	if not _is_finite(grid) or grid <= 0:
		raise ValueError(f"Grid must be a positive number, got {grid!r}")

	if mode not in MODES:
		raise ValueError(f"Unknown quantize mode {mode!r}. Available modes: {', '.join(MODES)}")

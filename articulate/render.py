"""Helpers for renderers that consume a compiled modulation stream.

The compiler only describes effects. These helpers show how a player
realises them:

- ``apply_modulations()`` turns notes plus modulations into concrete
  durations and clamped velocities.
- ``glide_steps()`` discretizes a pitch glide into a minimum number of
  steps.
- ``glide_pitchwheel()`` renders a glide as MIDI pitch-bend messages.

Example:
	```python
	compiled = articulate.compile_events(track)
	performed = articulate.render.apply_modulations(track["notes"], compiled.modulations)

	glide = next(m for m in compiled.modulations if m.type == "pitch")
	note = performed[glide.index]
	messages = articulate.render.glide_pitchwheel(glide, note.duration, bend_range=12)
	```
"""

import dataclasses
import logging
import typing

import mido

import articulate.config
import articulate.modulation
import articulate.note


logger = logging.getLogger(__name__)


PITCHWHEEL_MIN = -8192
PITCHWHEEL_MAX = 8191

DEFAULT_TICKS_PER_BEAT = 480
DEFAULT_BEND_RANGE = 2.0


GLIDE_CURVES: typing.Dict[str, typing.Callable[[float], float]] = {
	"linear":      lambda t: t,
	"exponential": lambda t: t * t * t,
	"ease_in_out": lambda t: t * t * (3.0 - 2.0 * t),
}


@dataclasses.dataclass(frozen=True)
class PerformedNote:

	"""
	A note with its modulations applied.

	``velocity`` is normalised (0.0-1.0) and already clamped. ``glide`` is
	the note's pitch modulation, if any, left for the renderer to realise.
	"""

	index: int
	pitch: articulate.note.PitchType
	time: float
	duration: float
	velocity: float
	glide: typing.Optional[articulate.modulation.PitchGlide] = None

	@property
	def midi_velocity (self) -> int:
		return max(1, min(127, int(round(self.velocity * 127))))


def apply_modulations (
	notes: typing.Sequence[typing.Any],
	modulations: typing.Sequence[articulate.modulation.ModulationEvent],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> typing.List[PerformedNote]:

	"""
	Apply compiled modulations to the notes they were compiled from.

	Durations are multiplied by their ``durationScale`` factor. Velocity
	boosts are added to the note's velocity (or the config's reference
	velocity) and clamped to ``[0, config.max_velocity]``.

	Raises ``IndexError`` if a modulation points outside *notes*.
	"""

	resolved = [articulate.note.coerce_note(note, i) for i, note in enumerate(notes)]

	factors: typing.Dict[int, float] = {}
	boosts: typing.Dict[int, float] = {}
	glides: typing.Dict[int, articulate.modulation.PitchGlide] = {}

	for event in modulations:

		if not 0 <= event.index < len(resolved):
			raise IndexError(f"Modulation index {event.index} is out of range for {len(resolved)} notes")

		if isinstance(event, articulate.modulation.DurationScale):
			factors[event.index] = factors.get(event.index, 1.0) * event.factor

		elif isinstance(event, articulate.modulation.VelocityBoost):
			boosts[event.index] = boosts.get(event.index, 0.0) + event.amount_boost

		elif isinstance(event, articulate.modulation.PitchGlide):
			glides.setdefault(event.index, event)

	performed: typing.List[PerformedNote] = []

	for i, note in enumerate(resolved):

		base_velocity = note.velocity if isinstance(note.velocity, (int, float)) and not isinstance(note.velocity, bool) else config.reference_velocity
		velocity = max(0.0, min(config.max_velocity, base_velocity + boosts.get(i, 0.0)))

		performed.append(PerformedNote(
			index = i,
			pitch = note.pitch,
			time = note.time,
			duration = note.duration * factors.get(i, 1.0),
			velocity = velocity,
			glide = glides.get(i),
		))

	return performed


def glide_steps (
	glide: articulate.modulation.PitchGlide,
	duration: float,
	min_steps: int = articulate.config.DEFAULT_CONFIG.glide_min_steps,
) -> typing.List[typing.Tuple[float, float]]:

	"""
	Discretize a glide into ``(offset, pitch)`` points.

	Uses one step per semitone of the glide, but never fewer than
	*min_steps*. Offsets are in quarter notes from the note's start; the
	first point is the starting pitch and the last the target.
	"""

	if duration <= 0:
		raise ValueError("Glide duration must be positive")

	if min_steps < 1:
		raise ValueError("min_steps must be at least 1")

	curve = GLIDE_CURVES.get(glide.curve, GLIDE_CURVES["linear"])
	count = max(min_steps, abs(glide.span))

	if count == 1:
		return [(0.0, float(glide.to_pitch))]

	points: typing.List[typing.Tuple[float, float]] = []

	for i in range(count):
		t = i / (count - 1)
		points.append((duration * i / count, glide.from_pitch + glide.span * curve(t)))

	return points


def glide_pitchwheel (
	glide: articulate.modulation.PitchGlide,
	duration: float,
	bend_range: float = DEFAULT_BEND_RANGE,
	ticks_per_beat: int = DEFAULT_TICKS_PER_BEAT,
	min_steps: int = articulate.config.DEFAULT_CONFIG.glide_min_steps,
	channel: int = 0,
) -> typing.List[mido.Message]:

	"""
	Render a glide as ``pitchwheel`` messages with delta times in ticks.

	The messages start at the note's onset and are followed by a reset to
	centre at the note's end. Glides wider than *bend_range* semitones are
	clamped to the wheel's limits.

	Parameters:
		glide: The pitch modulation to render.
		duration: Sounding duration of the note, in quarter notes.
		bend_range: The instrument's pitch-wheel range in semitones.
		ticks_per_beat: MIDI file resolution.
		min_steps: Minimum number of bend messages before the reset.
		channel: MIDI channel (0-15).
	"""

	if bend_range <= 0:
		raise ValueError("Bend range must be positive")

	if abs(glide.span) > bend_range:
		logger.warning(f"Glide of {glide.span} semitones exceeds bend range {bend_range}; clamping")

	messages: typing.List[mido.Message] = []
	last_tick = 0

	for offset, pitch in glide_steps(glide, duration, min_steps):
		tick = int(round(offset * ticks_per_beat))
		value = max(PITCHWHEEL_MIN, min(PITCHWHEEL_MAX, int(round((pitch - glide.from_pitch) / bend_range * 8192))))
		messages.append(mido.Message('pitchwheel', channel=channel, pitch=value, time=max(0, tick - last_tick)))
		last_tick = tick

	end_tick = int(round(duration * ticks_per_beat))
	messages.append(mido.Message('pitchwheel', channel=channel, pitch=0, time=max(0, end_tick - last_tick)))

	return messages

"""Compile articulated note lists into modulation streams.

The compiler runs three pure stages per note - normalization, rules and
conflict resolution - and collects the results for the whole track::

    import articulate

    track = {"notes": [
        {"pitch": 60, "duration": 1, "time": 0, "articulations": ["staccato", "accent"]},
        {"pitch": 64, "duration": 1, "time": 1, "articulations": [{"type": "glissando", "target": 67}]},
        {"pitch": 67, "duration": 1, "time": 2},
    ]}

    compiled = articulate.compile_events(track)
    compiled.to_dict()
    # {"modulations": [durationScale @0, velocityBoost @0, pitch @1]}

Inputs are never modified and identical inputs always compile to identical
output, so separate tracks can be compiled in parallel without locking.
"""

import collections.abc
import dataclasses
import logging
import re
import typing

import articulate.articulation
import articulate.config
import articulate.diagnostics
import articulate.modulation
import articulate.note
import articulate.resolver
import articulate.rules


logger = logging.getLogger(__name__)


DEFAULT_TEMPO = 120
DEFAULT_TIME_SIGNATURE = "4/4"

_TIME_SIGNATURE_PATTERN = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")


@dataclasses.dataclass(frozen=True)
class PerformanceContext:

	"""
	Musical context for a compilation.

	Accepted for converting quarter-note positions to absolute time in
	future; the current rules do not use it arithmetically.
	"""

	tempo: float = DEFAULT_TEMPO
	time_signature: str = DEFAULT_TIME_SIGNATURE

	def __post_init__ (self) -> None:

		if isinstance(self.tempo, bool) or not isinstance(self.tempo, (int, float)) or self.tempo <= 0:
			raise ValueError(f"Tempo must be a positive number, got {self.tempo!r}")

		if not isinstance(self.time_signature, str) or not _TIME_SIGNATURE_PATTERN.match(self.time_signature):
			raise ValueError(f"Time signature must look like '4/4', got {self.time_signature!r}")

	@classmethod
	def from_mapping (cls, data: typing.Mapping[str, typing.Any]) -> "PerformanceContext":

		"""Build a context from ``{"tempo": ..., "timeSignature": ...}`` (snake_case also accepted)."""

		return cls(
			tempo = data.get("tempo", DEFAULT_TEMPO),
			time_signature = data.get("timeSignature", data.get("time_signature", DEFAULT_TIME_SIGNATURE)),
		)


@dataclasses.dataclass
class CompiledTrack:

	"""
	The compiled modulation stream for one track.
	"""

	modulations: typing.List[articulate.modulation.ModulationEvent] = dataclasses.field(default_factory=list)
	diagnostics: typing.List[articulate.diagnostics.Diagnostic] = dataclasses.field(default_factory=list)
	name: typing.Optional[str] = None

	def to_dict (self, include_diagnostics: bool = False) -> typing.Dict[str, typing.Any]:

		result: typing.Dict[str, typing.Any] = {"modulations": [event.to_dict() for event in self.modulations]}

		if self.name is not None:
			result["name"] = self.name

		if include_diagnostics:
			result["diagnostics"] = [diagnostic.to_dict() for diagnostic in self.diagnostics]

		return result


@dataclasses.dataclass
class CompiledPerformance:

	"""
	Compiled tracks of a whole composition, in track order.
	"""

	tracks: typing.List[CompiledTrack] = dataclasses.field(default_factory=list)
	metadata: typing.Optional[typing.Dict[str, typing.Any]] = None

	def to_dict (self, include_diagnostics: bool = False) -> typing.Dict[str, typing.Any]:

		result: typing.Dict[str, typing.Any] = {"tracks": [track.to_dict(include_diagnostics) for track in self.tracks]}

		if self.metadata is not None:
			result["metadata"] = dict(self.metadata)

		return result


def compile_notes (
	notes: typing.Sequence[typing.Any],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> CompiledTrack:

	"""
	Compile a bare note list.

	Raises ``TypeError`` if *notes* is not a list or tuple, or if an entry
	is not a note mapping / ``Note``; ``ValueError`` for malformed fields.
	"""

	if not isinstance(notes, (list, tuple)):
		raise TypeError(f"Notes must be a list or tuple, got {type(notes).__name__}")

	compiled = CompiledTrack()

	for index, raw_note in enumerate(notes):

		note = articulate.note.coerce_note(raw_note, index)

		specs, diagnostics = articulate.articulation.normalize_note(note, config, index)
		compiled.diagnostics.extend(diagnostics)

		if not specs:
			continue

		contributions, diagnostics = articulate.rules.contributions_for_note(index, note, specs, config)
		compiled.diagnostics.extend(diagnostics)

		events, diagnostics = articulate.resolver.resolve_note(index, contributions, config)
		compiled.diagnostics.extend(diagnostics)
		compiled.modulations.extend(events)

	logger.debug(f"Compiled {len(notes)} notes into {len(compiled.modulations)} modulations ({len(compiled.diagnostics)} diagnostics)")

	return compiled


def compile_events (
	track: typing.Any,
	context: typing.Union[PerformanceContext, typing.Mapping[str, typing.Any], None] = None,
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> CompiledTrack:

	"""
	Compile one track into its modulation stream.

	Parameters:
		track: A mapping with a ``notes`` list (``events`` is accepted as a
			legacy alias), or any object with a ``notes`` attribute.
		context: Tempo and time signature. Validated, then reserved for
			converting to absolute time; it does not change the output.
		config: Coefficient table.

	Returns:
		A ``CompiledTrack``; ``to_dict()`` gives ``{"modulations": [...]}``.
	"""

	_coerce_context(context)

	compiled = compile_notes(_track_notes(track), config)
	compiled.name = _track_name(track)
	return compiled


def compile_performance (
	composition: typing.Mapping[str, typing.Any],
	context: typing.Union[PerformanceContext, typing.Mapping[str, typing.Any], None] = None,
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> CompiledPerformance:

	"""
	Compile every track of a composition.

	``composition["tracks"]`` may be a list of tracks (or bare note lists)
	or a mapping of track name to track / note list. When no *context* is
	given, ``tempo`` and ``timeSignature`` are read from the composition.
	``metadata`` is copied through.
	"""

	if not isinstance(composition, collections.abc.Mapping):
		raise TypeError(f"Composition must be a mapping, got {type(composition).__name__}")

	if context is None:
		context = PerformanceContext.from_mapping(composition)

	performance = CompiledPerformance()

	for name, track in _composition_tracks(composition):
		compiled = compile_events(track, context, config)
		if compiled.name is None:
			compiled.name = name
		performance.tracks.append(compiled)

	metadata = composition.get("metadata")
	if isinstance(metadata, collections.abc.Mapping):
		performance.metadata = dict(metadata)

	return performance


def _coerce_context (context: typing.Union[PerformanceContext, typing.Mapping[str, typing.Any], None]) -> PerformanceContext:

	if context is None:
		return PerformanceContext()

	if isinstance(context, PerformanceContext):
		return context

	if isinstance(context, collections.abc.Mapping):
		return PerformanceContext.from_mapping(context)

	raise TypeError(f"Context must be a PerformanceContext or mapping, got {type(context).__name__}")


def _track_notes (track: typing.Any) -> typing.Any:

	if isinstance(track, collections.abc.Mapping):
		if "notes" in track:
			return track["notes"]
		if "events" in track:
			return track["events"]
		raise TypeError("Track mapping has no 'notes'")

	if hasattr(track, "notes"):
		return track.notes

	raise TypeError(f"Track must be a mapping or have a 'notes' attribute, got {type(track).__name__}")


def _track_name (track: typing.Any) -> typing.Optional[str]:

	name = track.get("name") if isinstance(track, collections.abc.Mapping) else getattr(track, "name", None)
	return name if isinstance(name, str) else None


def _composition_tracks (composition: typing.Mapping[str, typing.Any]) -> typing.List[typing.Tuple[str, typing.Any]]:

	tracks = composition.get("tracks")

	if isinstance(tracks, (list, tuple)):
		return [
			(f"Track {i + 1}", {"notes": track} if isinstance(track, (list, tuple)) else track)
			for i, track in enumerate(tracks)
		]

	if isinstance(tracks, collections.abc.Mapping):
		return [
			(str(name), {"notes": track} if isinstance(track, (list, tuple)) else track)
			for name, track in tracks.items()
		]

	raise TypeError("Composition 'tracks' must be a list or a mapping of name to track")

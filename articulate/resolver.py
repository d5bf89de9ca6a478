"""Combine partial contributions into at most one event per type per note.

- ``durationScale`` factors multiply, then clamp to a positive floor.
- ``velocityBoost`` amounts add, then floor at zero. The ceiling is left to
  whatever applies the boost to a concrete velocity.
- ``pitch``: the first glide in spec order wins; later ones are dropped
  with a ``pitch_conflict`` diagnostic.

Output is sorted by note index, and within a note always follows
``durationScale, velocityBoost, pitch``.
"""

import collections
import typing

import articulate.config
import articulate.diagnostics
import articulate.modulation


def resolve_note (
	index: int,
	contributions: typing.Sequence[articulate.modulation.ModulationEvent],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> typing.Tuple[typing.List[articulate.modulation.ModulationEvent], typing.List[articulate.diagnostics.Diagnostic]]:

	"""
	Merge the contributions of a single note.

	All contributions must carry *index*.
	"""

	diagnostics: typing.List[articulate.diagnostics.Diagnostic] = []
	grouped: typing.Dict[str, typing.List[articulate.modulation.ModulationEvent]] = collections.defaultdict(list)

	for contribution in contributions:
		if contribution.index != index:
			raise ValueError(f"Contribution for note {contribution.index} passed to resolver for note {index}")
		grouped[contribution.type].append(contribution)

	resolved: typing.List[articulate.modulation.ModulationEvent] = []

	durations = grouped.get(articulate.modulation.DURATION_SCALE)
	if durations:
		factor = 1.0
		for scale in durations:
			factor *= scale.factor
		first = durations[0]
		resolved.append(articulate.modulation.DurationScale(
			index = index,
			factor = max(config.min_duration_factor, factor),
			start = first.start,
			end = first.end,
		))

	boosts = grouped.get(articulate.modulation.VELOCITY_BOOST)
	if boosts:
		amount = 0.0
		for boost in boosts:
			amount += boost.amount_boost
		first = boosts[0]
		resolved.append(articulate.modulation.VelocityBoost(
			index = index,
			amount_boost = max(0.0, amount),
			start = first.start,
			end = first.end,
		))

	glides = grouped.get(articulate.modulation.PITCH)
	if glides:
		resolved.append(glides[0])
		for dropped in glides[1:]:
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.PITCH_CONFLICT,
				f"{dropped.subtype} to {dropped.to_pitch} dropped: note already has a {glides[0].subtype} to {glides[0].to_pitch}",
				dropped.subtype
			)

	return resolved, diagnostics


def resolve (
	contributions: typing.Sequence[articulate.modulation.ModulationEvent],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> typing.Tuple[typing.List[articulate.modulation.ModulationEvent], typing.List[articulate.diagnostics.Diagnostic]]:

	"""
	Resolve contributions for any number of notes.

	Contributions are grouped by note index (keeping their relative order)
	and each note is resolved with ``resolve_note()``.
	"""

	by_note: typing.Dict[int, typing.List[articulate.modulation.ModulationEvent]] = collections.defaultdict(list)

	for contribution in contributions:
		by_note[contribution.index].append(contribution)

	events: typing.List[articulate.modulation.ModulationEvent] = []
	diagnostics: typing.List[articulate.diagnostics.Diagnostic] = []

	for index in sorted(by_note):
		note_events, note_diagnostics = resolve_note(index, by_note[index], config)
		events.extend(note_events)
		diagnostics.extend(note_diagnostics)

	return events, diagnostics

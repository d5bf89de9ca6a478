"""Articulation rules: canonical specs to partial modulation contributions.

Each rule turns one spec into zero or more events using the coefficients
of an ``ArticulationConfig``. Contributions are *partial*: a note with
``staccato`` and ``tenuto`` gets two ``DurationScale`` contributions here,
which the resolver later combines into one.

=============  ==================================================
staccato       DurationScale(staccato_duration)
staccatissimo  DurationScale(staccatissimo_duration)
tenuto         DurationScale(tenuto_duration) + VelocityBoost
accent         VelocityBoost
marcato        accent + tenuto
legato         nothing (phrasing only)
glissando      PitchGlide(from=note pitch, to=target)
portamento     PitchGlide(from=note pitch, to=target)
=============  ==================================================
"""

import logging
import typing

import articulate.articulation
import articulate.config
import articulate.diagnostics
import articulate.modulation
import articulate.note


logger = logging.getLogger(__name__)


Contributions = typing.List[articulate.modulation.ModulationEvent]

RuleFn = typing.Callable[
	[int, articulate.note.Note, articulate.articulation.ArticulationSpec, articulate.config.ArticulationConfig, typing.List[articulate.diagnostics.Diagnostic]],
	Contributions
]


def _staccato (index, note, spec, config, diagnostics) -> Contributions:
	return [articulate.modulation.DurationScale(index, config.staccato_duration, note.time, note.end)]


def _staccatissimo (index, note, spec, config, diagnostics) -> Contributions:
	return [articulate.modulation.DurationScale(index, config.staccatissimo_duration, note.time, note.end)]


def _tenuto (index, note, spec, config, diagnostics) -> Contributions:
	return [
		articulate.modulation.DurationScale(index, config.tenuto_duration, note.time, note.end),
		articulate.modulation.VelocityBoost(index, config.velocity_boost(config.tenuto_velocity), note.time, note.end),
	]


def _accent (index, note, spec, config, diagnostics) -> Contributions:
	return [articulate.modulation.VelocityBoost(index, config.velocity_boost(config.accent_velocity), note.time, note.end)]


def _marcato (index, note, spec, config, diagnostics) -> Contributions:

	# Derived from accent and tenuto rather than carrying its own coefficients
	return _accent(index, note, spec, config, diagnostics) + _tenuto(index, note, spec, config, diagnostics)


def _legato (index, note, spec, config, diagnostics) -> Contributions:
	return []


def _glide (index, note, spec, config, diagnostics) -> Contributions:

	from_pitch = note.main_pitch

	if from_pitch is None:
		articulate.diagnostics.report(
			diagnostics, index, articulate.diagnostics.REST_PITCH_IGNORED,
			f"{spec.name} on a rest has no pitch to glide from", spec.name
		)
		return []

	parameters = getattr(spec, "parameters", {})

	if parameters.get("target") is None:
		articulate.diagnostics.report(
			diagnostics, index, articulate.diagnostics.MISSING_PARAMETER,
			f"{spec.name} has no target pitch", spec.name
		)
		return []

	return [articulate.modulation.PitchGlide(
		index = index,
		subtype = spec.name,
		from_pitch = from_pitch,
		to_pitch = parameters["target"],
		curve = parameters.get("curve", "linear"),
		start = note.time,
		end = note.end,
	)]


RULES: typing.Dict[str, RuleFn] = {
	"staccato":      _staccato,
	"staccatissimo": _staccatissimo,
	"tenuto":        _tenuto,
	"accent":        _accent,
	"marcato":       _marcato,
	"legato":        _legato,
	"glissando":     _glide,
	"portamento":    _glide,
}


def contributions_for_note (
	index: int,
	note: articulate.note.Note,
	specs: typing.Sequence[articulate.articulation.ArticulationSpec],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> typing.Tuple[Contributions, typing.List[articulate.diagnostics.Diagnostic]]:

	"""
	Apply the rule for each spec of one note, in spec order.

	Parameters:
		index: Position of the note in its track.
		note: The note the specs belong to.
		specs: Normalized specs, in input order.
		config: Coefficient table.

	Returns:
		``(contributions, diagnostics)``. Contributions are not merged;
		the same type may appear more than once.
	"""

	contributions: Contributions = []
	diagnostics: typing.List[articulate.diagnostics.Diagnostic] = []

	for spec in specs:

		rule = RULES.get(spec.name)

		if rule is None:
			# Recognised by a custom config but with no quantitative effect
			logger.debug(f"Note {index}: no rule for '{spec.name}', passing through")
			continue

		contributions.extend(rule(index, note, spec, config, diagnostics))

	return contributions, diagnostics

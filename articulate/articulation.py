"""Articulation normalization.

A note's articulation data is loosely typed: a bare name, a list of names,
parameterized mappings, or a mix::

    "staccato"
    ["staccato", "accent"]
    ["accent", {"type": "glissando", "target": 67, "curve": "ease_in_out"}]

``normalize()`` is the one boundary where that data is inspected. It
returns a list of ``SimpleSpec`` / ``ComplexSpec`` values in input order
plus a list of diagnostics for every entry that was dropped. Nothing past
this module looks at raw articulation data.

``add_articulation()`` and ``remove_articulation()`` edit a note list
without modifying it, validating new entries through ``normalize()``.
"""

import collections.abc
import dataclasses
import numbers
import typing

import articulate.config
import articulate.constants
import articulate.constants.articulations
import articulate.diagnostics
import articulate.note


@dataclasses.dataclass(frozen=True)
class SimpleSpec:

	"""A named articulation with no parameters (``staccato``, ``accent``...)."""

	name: str


@dataclasses.dataclass(frozen=True)
class ComplexSpec:

	"""A parameterized articulation (``glissando`` with a ``target``...)."""

	type: str
	parameters: typing.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)

	@property
	def name (self) -> str:
		return self.type


ArticulationSpec = typing.Union[SimpleSpec, ComplexSpec]


@dataclasses.dataclass
class ValidationResult:

	"""Outcome of ``validate_sequence()``."""

	valid: bool
	issues: typing.List[articulate.diagnostics.Diagnostic] = dataclasses.field(default_factory=list)


def normalize (
	raw: typing.Any,
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
	index: int = 0,
) -> typing.Tuple[typing.List[ArticulationSpec], typing.List[articulate.diagnostics.Diagnostic]]:

	"""
	Normalize raw articulation data into canonical specs.

	Parameters:
		raw: ``None``, a shorthand name, a parameterized mapping, or a list
			mixing both.
		config: Supplies the recognised names and required parameters.
		index: Position of the owning note, used in diagnostics.

	Returns:
		``(specs, diagnostics)``. Entries that fail to resolve are dropped
		and reported; the rest keep their input order.
	"""

	specs: typing.List[ArticulationSpec] = []
	diagnostics: typing.List[articulate.diagnostics.Diagnostic] = []

	if raw is None:
		return specs, diagnostics

	if isinstance(raw, (str, collections.abc.Mapping)):
		entries: typing.Sequence[typing.Any] = [raw]

	elif isinstance(raw, (list, tuple)):
		entries = raw

	else:
		articulate.diagnostics.report(
			diagnostics, index, articulate.diagnostics.MALFORMED_ARTICULATION,
			f"articulations must be a name, mapping or list, got {type(raw).__name__}"
		)
		return specs, diagnostics

	for entry in entries:
		spec = _resolve_entry(entry, config, index, diagnostics)
		if spec is not None:
			specs.append(spec)

	return specs, diagnostics


def normalize_note (
	note: articulate.note.Note,
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
	index: int = 0,
) -> typing.Tuple[typing.List[ArticulationSpec], typing.List[articulate.diagnostics.Diagnostic]]:

	"""
	Normalize every articulation field of a note.

	The ``articulations`` field comes first, followed by the legacy single
	``articulation`` name. A legacy ``glissando``/``portamento`` takes its
	target from ``gliss_target``.
	"""

	specs, diagnostics = normalize(note.articulations, config, index)

	if note.articulation is not None:

		legacy: typing.Any = note.articulation

		if isinstance(legacy, str) and config.required_parameters(legacy) is not None and note.gliss_target is not None:
			legacy = {"type": legacy, "target": note.gliss_target}

		legacy_specs, legacy_diagnostics = normalize(legacy, config, index)
		specs.extend(legacy_specs)
		diagnostics.extend(legacy_diagnostics)

	return specs, diagnostics


def validate_sequence (
	notes: typing.Sequence[typing.Any],
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> ValidationResult:

	"""
	Report every articulation problem in a note list without compiling it.

	Malformed notes still raise, as they do in the compiler.
	"""

	issues: typing.List[articulate.diagnostics.Diagnostic] = []

	for i, raw_note in enumerate(notes):
		note = articulate.note.coerce_note(raw_note, i)
		_, diagnostics = normalize_note(note, config, i)
		issues.extend(diagnostics)

	return ValidationResult(valid=not issues, issues=issues)


def available_types (config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG) -> typing.List[typing.Dict[str, typing.Any]]:

	"""Describe each articulation the config recognises."""

	described: typing.List[typing.Dict[str, typing.Any]] = []

	for name in config.simple_articulations:
		described.append({
			"type": name,
			"complex": False,
			"description": articulate.constants.articulations.SIMPLE_ARTICULATIONS.get(name, ""),
			"required_params": [],
			"optional_params": [],
		})

	for name, required in config.complex_articulations:
		definition = articulate.constants.articulations.COMPLEX_ARTICULATIONS.get(name, {})
		described.append({
			"type": name,
			"complex": True,
			"description": definition.get("description", ""),
			"required_params": list(required),
			"optional_params": list(definition.get("optional", ())),
		})

	return described


def add_articulation (
	notes: typing.Sequence[typing.Any],
	index: int,
	articulation: typing.Any,
	config: articulate.config.ArticulationConfig = articulate.config.DEFAULT_CONFIG,
) -> typing.List[typing.Any]:

	"""
	Return a copy of *notes* with *articulation* appended to one note.

	Parameters:
		notes: Note mappings or ``Note`` values.
		index: Position of the note to edit.
		articulation: A shorthand name (``"accent"``) or a parameterized
			mapping (``{"type": "glissando", "target": 67}``).
		config: Supplies the recognised names and required parameters.

	The articulation is checked with ``normalize()`` first and a
	``ValueError`` is raised if it would be dropped. Only the edited note is
	rebuilt; the other notes are shared with the input, which is never
	modified.

	Example:
		```python
		notes = add_articulation(notes, 1, {"type": "glissando", "target": 67})
		```
	"""

	edited = _copy_notes(notes, index)

	if not isinstance(articulation, (str, collections.abc.Mapping)):
		raise TypeError(f"Articulation must be a name or mapping, got {type(articulation).__name__}")

	_, diagnostics = normalize(articulation, config, index)

	if diagnostics:
		raise ValueError(diagnostics[0].message)

	entry = articulation if isinstance(articulation, str) else dict(articulation)
	note = articulate.note.coerce_note(edited[index], index)

	edited[index] = _with_articulations(edited[index], _entry_list(note.articulations) + [entry])
	return edited


def remove_articulation (
	notes: typing.Sequence[typing.Any],
	index: int,
	predicate: typing.Optional[typing.Callable[[typing.Optional[str]], bool]] = None,
) -> typing.List[typing.Any]:

	"""
	Return a copy of *notes* with articulations removed from one note.

	*predicate* receives each entry's name (the string itself, or a
	mapping's ``type``) and returns True for entries to remove. Without a
	predicate the note's ``articulations`` are cleared. The legacy single
	``articulation`` field is left alone.
	"""

	edited = _copy_notes(notes, index)
	note = articulate.note.coerce_note(edited[index], index)

	kept = [
		entry for entry in _entry_list(note.articulations)
		if predicate is not None and not predicate(_entry_name(entry))
	]

	edited[index] = _with_articulations(edited[index], kept)
	return edited


def _copy_notes (notes: typing.Any, index: typing.Any) -> typing.List[typing.Any]:

	if not isinstance(notes, (list, tuple)):
		raise TypeError(f"Notes must be a list, got {type(notes).__name__}")

	if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(notes):
		raise IndexError(f"Note index {index!r} out of range for {len(notes)} notes")

	return list(notes)


def _entry_list (raw: typing.Any) -> typing.List[typing.Any]:

	if raw is None:
		return []

	if isinstance(raw, (list, tuple)):
		return list(raw)

	return [raw]


def _entry_name (entry: typing.Any) -> typing.Optional[str]:

	if isinstance(entry, str):
		return entry

	if isinstance(entry, collections.abc.Mapping):
		return entry.get("type")

	return None


def _with_articulations (raw_note: typing.Any, articulations: typing.List[typing.Any]) -> typing.Any:

	if isinstance(raw_note, articulate.note.Note):
		return dataclasses.replace(raw_note, articulations=articulations)

	updated = dict(raw_note)
	updated["articulations"] = articulations
	return updated


def _resolve_entry (
	entry: typing.Any,
	config: articulate.config.ArticulationConfig,
	index: int,
	diagnostics: typing.List[articulate.diagnostics.Diagnostic],
) -> typing.Optional[ArticulationSpec]:

	if isinstance(entry, str):

		if config.is_simple(entry):
			return SimpleSpec(name=entry)

		required = config.required_parameters(entry)
		if required is not None:
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.MISSING_PARAMETER,
				f"'{entry}' requires parameters ({', '.join(required)}) and cannot be used as a bare name",
				entry
			)
			return None

		articulate.diagnostics.report(
			diagnostics, index, articulate.diagnostics.UNKNOWN_ARTICULATION,
			f"Unknown articulation '{entry}'", entry
		)
		return None

	if isinstance(entry, collections.abc.Mapping):

		type_name = entry.get("type")

		if not isinstance(type_name, str):
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.MALFORMED_ARTICULATION,
				f"Articulation mapping has no string 'type': {dict(entry)!r}"
			)
			return None

		if config.is_simple(type_name):
			return SimpleSpec(name=type_name)

		required = config.required_parameters(type_name)
		if required is None:
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.UNKNOWN_ARTICULATION,
				f"Unknown articulation type '{type_name}'", type_name
			)
			return None

		missing = [param for param in required if entry.get(param) is None]
		if missing:
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.MISSING_PARAMETER,
				f"Missing required parameter(s) {', '.join(missing)} for {type_name}", type_name
			)
			return None

		parameters = {key: value for key, value in entry.items() if key != "type"}
		problem = _check_parameters(parameters)
		if problem:
			articulate.diagnostics.report(
				diagnostics, index, articulate.diagnostics.INVALID_PARAMETER,
				f"{problem} for {type_name}", type_name
			)
			return None

		if "target" in parameters:
			parameters["target"] = int(parameters["target"])

		return ComplexSpec(type=type_name, parameters=parameters)

	articulate.diagnostics.report(
		diagnostics, index, articulate.diagnostics.MALFORMED_ARTICULATION,
		f"Articulation entries must be names or mappings, got {type(entry).__name__}"
	)
	return None


def _check_parameters (parameters: typing.Mapping[str, typing.Any]) -> typing.Optional[str]:

	"""Return a description of the first invalid parameter, or None."""

	if "target" in parameters:
		target = parameters["target"]
		if isinstance(target, bool) or not (isinstance(target, numbers.Integral) or (isinstance(target, float) and target.is_integer())):
			return f"target must be an integer MIDI pitch, got {target!r}"
		if not articulate.constants.MIN_PITCH <= target <= articulate.constants.MAX_PITCH:
			return f"target {target} is outside 0-127"

	if "curve" in parameters and parameters["curve"] not in articulate.constants.articulations.GLIDE_CURVES:
		return f"Unknown curve {parameters['curve']!r}"

	return None

import copy

import pytest

import articulate.articulation
import articulate.config
import articulate.diagnostics
import articulate.note


def _codes (diagnostics) -> list:
	return [d.code for d in diagnostics]


# ── normalize() ──────────────────────────────────────────────────────

def test_normalize_single_name () -> None:

	"""A bare string is a one-element list."""

	specs, diagnostics = articulate.articulation.normalize("staccato")

	assert specs == [articulate.articulation.SimpleSpec("staccato")]
	assert diagnostics == []


def test_normalize_mixed_list_keeps_order () -> None:

	"""Names and mappings resolve in their input order."""

	specs, diagnostics = articulate.articulation.normalize([
		"accent",
		{"type": "glissando", "target": 67},
		{"type": "staccato"},
	])

	assert specs == [
		articulate.articulation.SimpleSpec("accent"),
		articulate.articulation.ComplexSpec("glissando", {"target": 67}),
		articulate.articulation.SimpleSpec("staccato"),
	]
	assert diagnostics == []


def test_normalize_none_is_empty () -> None:

	"""No articulation data gives no specs and no diagnostics."""

	assert articulate.articulation.normalize(None) == ([], [])
	assert articulate.articulation.normalize([]) == ([], [])


def test_normalize_drops_unknown_name () -> None:

	"""An unknown name is dropped and the rest of the list survives."""

	specs, diagnostics = articulate.articulation.normalize(["staccato", "wobble", "accent"], index=4)

	assert [s.name for s in specs] == ["staccato", "accent"]
	assert _codes(diagnostics) == [articulate.diagnostics.UNKNOWN_ARTICULATION]
	assert diagnostics[0].index == 4
	assert diagnostics[0].articulation == "wobble"


def test_normalize_drops_unknown_type () -> None:

	"""An unknown parameterized type is dropped, never coerced."""

	specs, diagnostics = articulate.articulation.normalize([{"type": "bend", "amount": 50}])

	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.UNKNOWN_ARTICULATION]


def test_normalize_missing_target () -> None:

	"""A glissando without a target is dropped with a diagnostic."""

	specs, diagnostics = articulate.articulation.normalize([{"type": "glissando"}, "accent"])

	assert specs == [articulate.articulation.SimpleSpec("accent")]
	assert _codes(diagnostics) == [articulate.diagnostics.MISSING_PARAMETER]


def test_normalize_bare_complex_name () -> None:

	"""A complex type given as a bare name lacks its parameters."""

	specs, diagnostics = articulate.articulation.normalize("portamento")

	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.MISSING_PARAMETER]


@pytest.mark.parametrize("target", ["67", 67.5, 200, -1, True])
def test_normalize_invalid_target (target) -> None:

	"""Targets must be integer MIDI pitches."""

	specs, diagnostics = articulate.articulation.normalize({"type": "glissando", "target": target})

	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.INVALID_PARAMETER]


def test_normalize_integral_float_target () -> None:

	"""A float target with no fractional part becomes an int."""

	specs, _ = articulate.articulation.normalize({"type": "glissando", "target": 67.0})

	assert specs[0].parameters["target"] == 67
	assert isinstance(specs[0].parameters["target"], int)


def test_normalize_curve () -> None:

	"""Known curves are kept; unknown curves invalidate the entry."""

	specs, _ = articulate.articulation.normalize({"type": "portamento", "target": 50, "curve": "ease_in_out"})
	assert specs[0].parameters == {"target": 50, "curve": "ease_in_out"}

	specs, diagnostics = articulate.articulation.normalize({"type": "portamento", "target": 50, "curve": "wiggly"})
	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.INVALID_PARAMETER]


def test_normalize_malformed_entries () -> None:

	"""Entries that are neither names nor mappings are dropped."""

	specs, diagnostics = articulate.articulation.normalize([42, {"target": 60}, "tenuto"])

	assert specs == [articulate.articulation.SimpleSpec("tenuto")]
	assert _codes(diagnostics) == [articulate.diagnostics.MALFORMED_ARTICULATION] * 2


def test_normalize_malformed_container () -> None:

	"""A container of the wrong type is reported, not raised."""

	specs, diagnostics = articulate.articulation.normalize(3.5)

	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.MALFORMED_ARTICULATION]


def test_normalize_does_not_mutate_input () -> None:

	"""The raw list and its mappings are left untouched."""

	raw = [{"type": "glissando", "target": 67.0, "curve": "linear"}]

	articulate.articulation.normalize(raw)

	assert raw == [{"type": "glissando", "target": 67.0, "curve": "linear"}]


def test_normalize_custom_config () -> None:

	"""Recognised names come from the config."""

	config = articulate.config.ArticulationConfig(simple_articulations=("accent",))

	specs, diagnostics = articulate.articulation.normalize(["accent", "staccato"], config)

	assert [s.name for s in specs] == ["accent"]
	assert _codes(diagnostics) == [articulate.diagnostics.UNKNOWN_ARTICULATION]


# ── normalize_note() ─────────────────────────────────────────────────

def test_normalize_note_legacy_fields () -> None:

	"""The legacy single articulation follows the list, with glissTarget as its target."""

	note = articulate.note.Note.from_mapping({
		"pitch": 60,
		"duration": 1,
		"articulations": ["accent"],
		"articulation": "glissando",
		"glissTarget": 72,
	})

	specs, diagnostics = articulate.articulation.normalize_note(note)

	assert specs == [
		articulate.articulation.SimpleSpec("accent"),
		articulate.articulation.ComplexSpec("glissando", {"target": 72}),
	]
	assert diagnostics == []


def test_normalize_note_legacy_without_target () -> None:

	"""A legacy glissando with no glissTarget is missing its parameter."""

	note = articulate.note.Note(pitch=60, duration=1, articulation="glissando")

	specs, diagnostics = articulate.articulation.normalize_note(note, index=2)

	assert specs == []
	assert _codes(diagnostics) == [articulate.diagnostics.MISSING_PARAMETER]
	assert diagnostics[0].index == 2


# ── validate_sequence() / available_types() ──────────────────────────

def test_validate_sequence_reports_all_issues () -> None:

	"""Every problem across the note list is reported with its index."""

	result = articulate.articulation.validate_sequence([
		{"pitch": 60, "duration": 1, "articulations": ["staccato"]},
		{"pitch": 62, "duration": 1, "articulations": ["nope", {"type": "glissando"}]},
	])

	assert result.valid is False
	assert [(d.index, d.code) for d in result.issues] == [
		(1, articulate.diagnostics.UNKNOWN_ARTICULATION),
		(1, articulate.diagnostics.MISSING_PARAMETER),
	]


def test_validate_sequence_valid () -> None:

	"""A clean note list validates."""

	result = articulate.articulation.validate_sequence([{"pitch": 60, "duration": 1, "articulations": "legato"}])

	assert result.valid is True
	assert result.issues == []


def test_available_types () -> None:

	"""Both simple and complex types are described."""

	described = {entry["type"]: entry for entry in articulate.articulation.available_types()}

	assert described["staccato"]["complex"] is False
	assert described["glissando"]["complex"] is True
	assert described["glissando"]["required_params"] == ["target"]
	assert "curve" in described["portamento"]["optional_params"]


# ── add_articulation() / remove_articulation() ───────────────────────

def test_add_articulation_appends_without_mutating () -> None:

	"""The edited note gets a new list; the input list and notes are untouched."""

	notes = [
		{"pitch": 60, "duration": 1, "articulations": ["staccato"]},
		{"pitch": 62, "duration": 1},
	]
	before = copy.deepcopy(notes)

	edited = articulate.articulation.add_articulation(notes, 0, "accent")
	edited = articulate.articulation.add_articulation(edited, 1, {"type": "glissando", "target": 67})

	assert edited[0]["articulations"] == ["staccato", "accent"]
	assert edited[1]["articulations"] == [{"type": "glissando", "target": 67}]
	assert notes == before
	assert edited is not notes


def test_add_articulation_to_single_name_field () -> None:

	"""A bare-string articulations field becomes a list."""

	edited = articulate.articulation.add_articulation([{"pitch": 60, "duration": 1, "articulations": "tenuto"}], 0, "accent")

	assert edited[0]["articulations"] == ["tenuto", "accent"]


def test_add_articulation_to_note_value () -> None:

	"""Note instances are rebuilt with dataclasses.replace."""

	note = articulate.note.Note(pitch=60, duration=1)

	edited = articulate.articulation.add_articulation([note], 0, "marcato")

	assert isinstance(edited[0], articulate.note.Note)
	assert edited[0].articulations == ["marcato"]
	assert note.articulations is None


def test_add_articulation_rejects_invalid () -> None:

	"""Entries that normalize() would drop are refused."""

	notes = [{"pitch": 60, "duration": 1}]

	with pytest.raises(ValueError):
		articulate.articulation.add_articulation(notes, 0, "wobble")

	with pytest.raises(ValueError):
		articulate.articulation.add_articulation(notes, 0, {"type": "glissando"})

	with pytest.raises(ValueError):
		articulate.articulation.add_articulation(notes, 0, {"type": "portamento", "target": 200})

	with pytest.raises(TypeError):
		articulate.articulation.add_articulation(notes, 0, ["accent"])

	with pytest.raises(IndexError):
		articulate.articulation.add_articulation(notes, 1, "accent")

	assert notes == [{"pitch": 60, "duration": 1}]


def test_remove_articulation_all () -> None:

	"""Without a predicate every entry is removed."""

	notes = [{"pitch": 60, "duration": 1, "articulations": ["staccato", {"type": "glissando", "target": 67}]}]

	edited = articulate.articulation.remove_articulation(notes, 0)

	assert edited[0]["articulations"] == []
	assert len(notes[0]["articulations"]) == 2


def test_remove_articulation_with_predicate () -> None:

	"""The predicate sees names and mapping types and picks what goes."""

	notes = [
		{"pitch": 60, "duration": 1},
		{"pitch": 62, "duration": 1, "articulations": ["accent", {"type": "glissando", "target": 67}, "staccato"]},
	]

	edited = articulate.articulation.remove_articulation(notes, 1, lambda name: name == "glissando")

	assert edited[1]["articulations"] == ["accent", "staccato"]
	assert edited[0] is notes[0]


def test_remove_articulation_out_of_range () -> None:

	"""An index outside the note list raises IndexError."""

	with pytest.raises(IndexError):
		articulate.articulation.remove_articulation([], 0)

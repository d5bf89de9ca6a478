import pytest

import articulate
import articulate.modulation
import articulate.render


# ── apply_modulations() ──────────────────────────────────────────────

def test_apply_modulations (example_track) -> None:

	"""Durations scale and boosted velocities clamp at the ceiling."""

	compiled = articulate.compile_events(example_track)
	performed = articulate.render.apply_modulations(example_track["notes"], compiled.modulations)

	assert [p.duration for p in performed] == [0.5, 1, 1]
	assert performed[0].velocity == 1.0
	assert performed[1].velocity == pytest.approx(0.8)
	assert performed[1].glide is compiled.modulations[2]
	assert performed[2].glide is None


def test_apply_modulations_uses_note_velocity () -> None:

	"""A note's own velocity is the base for its boost."""

	notes = [{"pitch": 60, "duration": 1, "velocity": 0.1}]
	boost = articulate.modulation.VelocityBoost(0, 0.25)

	performed = articulate.render.apply_modulations(notes, [boost])

	assert performed[0].velocity == pytest.approx(0.35)
	assert performed[0].midi_velocity == 44


def test_apply_modulations_out_of_range_index () -> None:

	"""Modulations must point at an existing note."""

	with pytest.raises(IndexError):
		articulate.render.apply_modulations([{"pitch": 60, "duration": 1}], [articulate.modulation.DurationScale(3, 0.5)])


# ── glide_steps() ────────────────────────────────────────────────────

def test_glide_steps_minimum () -> None:

	"""A narrow glide still gets the minimum number of steps."""

	glide = articulate.modulation.PitchGlide(0, "glissando", 60, 61)

	points = articulate.render.glide_steps(glide, 1.0, min_steps=3)

	assert len(points) == 3
	assert points[0] == (0.0, 60.0)
	assert points[-1][1] == pytest.approx(61.0)


def test_glide_steps_one_per_semitone () -> None:

	"""Wide glides step once per semitone."""

	glide = articulate.modulation.PitchGlide(0, "glissando", 60, 72)

	points = articulate.render.glide_steps(glide, 3.0)

	assert len(points) == 12
	assert [offset for offset, _ in points] == pytest.approx([i * 0.25 for i in range(12)])
	assert points[-1][1] == pytest.approx(72.0)


def test_glide_steps_downward_curve () -> None:

	"""Downward glides move monotonically toward the target."""

	glide = articulate.modulation.PitchGlide(0, "portamento", 67, 60, curve="ease_in_out")

	pitches = [pitch for _, pitch in articulate.render.glide_steps(glide, 1.0)]

	assert pitches == sorted(pitches, reverse=True)
	assert pitches[0] == 67.0
	assert pitches[-1] == pytest.approx(60.0)


def test_glide_steps_rejects_bad_arguments () -> None:

	"""Zero duration or zero steps are caller errors."""

	glide = articulate.modulation.PitchGlide(0, "glissando", 60, 62)

	with pytest.raises(ValueError):
		articulate.render.glide_steps(glide, 0.0)

	with pytest.raises(ValueError):
		articulate.render.glide_steps(glide, 1.0, min_steps=0)


# ── glide_pitchwheel() ───────────────────────────────────────────────

def test_glide_pitchwheel_messages () -> None:

	"""A whole-tone glide on a 2-semitone wheel reaches full bend, then resets."""

	glide = articulate.modulation.PitchGlide(0, "glissando", 60, 62)

	messages = articulate.render.glide_pitchwheel(glide, 1.0, bend_range=2.0, ticks_per_beat=480, min_steps=4)

	assert all(m.type == "pitchwheel" for m in messages)
	assert [m.pitch for m in messages] == [0, 2731, 5461, 8191, 0]
	assert [m.time for m in messages] == [0, 120, 120, 120, 120]
	assert sum(m.time for m in messages) == 480


def test_glide_pitchwheel_clamps_wide_glides () -> None:

	"""Glides beyond the bend range clamp to the wheel limits."""

	glide = articulate.modulation.PitchGlide(0, "glissando", 60, 48)

	messages = articulate.render.glide_pitchwheel(glide, 2.0, bend_range=2.0, channel=3)

	assert min(m.pitch for m in messages) == -8192
	assert all(m.channel == 3 for m in messages)


def test_glide_pitchwheel_bad_range () -> None:

	"""A non-positive bend range is rejected."""

	with pytest.raises(ValueError):
		articulate.render.glide_pitchwheel(articulate.modulation.PitchGlide(0, "glissando", 60, 62), 1.0, bend_range=0)

import json
import logging

import mido

import articulate
import articulate.constants.durations as dur
import articulate.render

logging.basicConfig(level=logging.INFO)

# A short phrase with slightly loose timing, as it might arrive from a MIDI take.
track = {
	"name": "lead",
	"notes": [
		{"pitch": 60, "time": 0.02, "duration": 0.48, "articulations": ["staccato", "accent"]},
		{"pitch": 62, "time": 0.51, "duration": 0.47, "articulations": "tenuto"},
		{"pitch": 64, "time": 0.98, "duration": 1.03, "articulations": [{"type": "portamento", "target": 66, "curve": "ease_in_out"}]},
		{"pitch": None, "time": 2.0, "duration": 1.0},
		{"pitch": [60, 64, 67], "time": 3.01, "duration": 0.99, "articulations": ["marcato", "wobble"]},
	],
}

track = articulate.quantize_track(track, grid=dur.SIXTEENTH)
compiled = articulate.compile_events(track, {"tempo": 100, "timeSignature": "4/4"})

print(json.dumps(compiled.to_dict(include_diagnostics=True), indent=2))

ticks_per_beat = 480

# Collect (tick, message) pairs first, then convert to delta times.
events = []

for note in articulate.render.apply_modulations(track["notes"], compiled.modulations):

	if note.pitch is None:
		continue

	pitches = note.pitch if isinstance(note.pitch, tuple) else (note.pitch,)
	onset = int(round(note.time * ticks_per_beat))
	release = onset + int(round(note.duration * ticks_per_beat))

	for pitch in pitches:
		events.append((onset, mido.Message('note_on', note=pitch, velocity=note.midi_velocity)))
		events.append((release, mido.Message('note_off', note=pitch, velocity=0)))

	if note.glide is not None:
		tick = onset
		for message in articulate.render.glide_pitchwheel(note.glide, note.duration, ticks_per_beat=ticks_per_beat):
			tick += message.time
			events.append((tick, message))

events.sort(key=lambda x: x[0])

midi_file = mido.MidiFile(type=0, ticks_per_beat=ticks_per_beat)
midi_track = mido.MidiTrack()
midi_file.tracks.append(midi_track)

last_tick = 0
for tick, message in events:
	midi_track.append(message.copy(time=tick - last_tick))
	last_tick = tick

midi_file.save("articulated_phrase.mid")

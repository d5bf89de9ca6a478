"""
articulate - compile note articulations into performance modulations.

A note list says *what* to play; its articulations say *how*. articulate
turns declarative articulation markings into a small, renderer-agnostic
stream of modulation events that every player (text notation, structured
notation, MIDI, audio) can read the same way:

- **durationScale** - shorten or lengthen the sounding note (staccato,
  staccatissimo, tenuto, marcato).
- **velocityBoost** - raise the note's loudness (accent, tenuto, marcato).
- **pitch** - glide from the note's pitch to a target (glissando,
  portamento).

Compilation is pure and deterministic: inputs are never modified, and the
same track always compiles to the same events, in the same order.

Also included:

- **Quantization.** ``quantize_events()``, ``quantize_track()`` and
  ``quantize_composition()`` snap times and durations to a quarter-note
  grid (``articulate.quantize.quantize()`` snaps a single value);
  ``encode_abc_duration()`` gives the ABC length suffix for a duration.
- **Configurable coefficients.** ``ArticulationConfig`` holds the
  coefficient table and can be loaded from YAML with ``load_config()``.
- **Renderer helpers.** ``articulate.render`` applies modulations to
  concrete notes and renders glides as MIDI pitch bend.

Minimal example:

    ```python
    import articulate

    track = {"notes": [
        {"pitch": 60, "duration": 1, "time": 0, "articulations": ["staccato", "accent"]},
        {"pitch": 64, "duration": 1, "time": 1, "articulations": [{"type": "glissando", "target": 67}]},
        {"pitch": 67, "duration": 1, "time": 2},
    ]}

    compiled = articulate.compile_events(track, {"tempo": 120, "timeSignature": "4/4"})
    print(compiled.to_dict())
    ```

Package-level exports: ``compile_events``, ``compile_performance``,
``PerformanceContext``, ``ArticulationConfig``, ``load_config``, and the
quantization functions.
"""

import articulate.compiler
import articulate.config
import articulate.quantize


ArticulationConfig = articulate.config.ArticulationConfig
DEFAULT_CONFIG = articulate.config.DEFAULT_CONFIG
load_config = articulate.config.load_config

PerformanceContext = articulate.compiler.PerformanceContext
compile_events = articulate.compiler.compile_events
compile_performance = articulate.compiler.compile_performance

quantize_events = articulate.quantize.quantize_events
quantize_track = articulate.quantize.quantize_track
quantize_composition = articulate.quantize.quantize_composition
encode_abc_duration = articulate.quantize.encode_abc_duration

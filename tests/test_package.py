import articulate


def test_package_exports () -> None:

	"""The package imports cleanly and its shortcuts reach the real functions."""

	events = articulate.quantize_events([{"time": 0.1, "duration": 0.9}])

	assert events == [{"time": 0.0, "duration": 1.0}]
	assert articulate.quantize.quantize(1.13) == 1.25
	assert articulate.encode_abc_duration(2) == "2"
	assert articulate.DEFAULT_CONFIG.staccato_duration == 0.5


def test_package_compile_shortcut (example_track) -> None:

	"""compile_events is reachable from the package top level."""

	compiled = articulate.compile_events(example_track, {"tempo": 120, "timeSignature": "4/4"})

	assert [m["type"] for m in compiled.to_dict()["modulations"]] == ["durationScale", "velocityBoost", "pitch"]

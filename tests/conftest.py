import typing

import pytest


@pytest.fixture
def example_track () -> typing.Dict[str, typing.Any]:

	"""A three-note track: staccato+accent, a glissando, and a plain note."""

	return {
		"notes": [
			{"pitch": 60, "duration": 1, "time": 0, "articulations": ["staccato", "accent"]},
			{"pitch": 64, "duration": 1, "time": 1, "articulations": [{"type": "glissando", "target": 67}]},
			{"pitch": 67, "duration": 1, "time": 2},
		]
	}


@pytest.fixture
def config_file (tmp_path: typing.Any) -> typing.Callable[[str], str]:

	"""Write YAML text to a temporary config file and return its path."""

	def _write (text: str) -> str:
		path = tmp_path / "coefficients.yaml"
		path.write_text(text)
		return str(path)

	return _write

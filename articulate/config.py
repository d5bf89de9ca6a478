"""Coefficient table and settings for the performance compiler.

The rule engine never reads module-level state: every coefficient it uses
comes from an ``ArticulationConfig`` passed in by the caller. The default
table lives in ``DEFAULT_CONFIG``; override values in code or load them from
YAML::

    # coefficients.yaml
    staccato_duration: 0.4
    accent_velocity: 1.5
    glide_min_steps: 8

    config = articulate.config.load_config("coefficients.yaml")
    compiled = articulate.compile_events(track, config=config)
"""

import collections.abc
import dataclasses
import logging
import math
import os
import typing

import yaml

import articulate.constants.articulations
import articulate.constants.velocity


logger = logging.getLogger(__name__)


def _is_finite_number (value: typing.Any) -> bool:

	return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclasses.dataclass(frozen=True)
class ArticulationConfig:

	"""
	Immutable coefficient table for articulation compilation.

	Parameters:
		staccato_duration: Duration factor for ``staccato``.
		staccatissimo_duration: Duration factor for ``staccatissimo``.
		tenuto_duration: Duration factor for ``tenuto`` (and ``marcato``).
		tenuto_velocity: Velocity factor for ``tenuto`` (and ``marcato``).
		accent_velocity: Velocity factor for ``accent`` (and ``marcato``).
		max_velocity: Ceiling applied when a boost meets a concrete velocity.
		reference_velocity: Velocity a factor is scaled against to produce
			a boost, and the default for notes without one.
		min_duration_factor: Floor for a combined duration factor.
		glide_min_steps: Minimum subdivision count for renderers that
			discretize a glide. The compiler itself never uses it.
		simple_articulations: Recognised shorthand names.
		complex_articulations: Recognised parameterized types mapped to
			their required parameter names.
	"""

	staccato_duration: float = articulate.constants.articulations.STACCATO_DURATION_FACTOR
	staccatissimo_duration: float = articulate.constants.articulations.STACCATISSIMO_DURATION_FACTOR
	tenuto_duration: float = articulate.constants.articulations.TENUTO_DURATION_FACTOR
	tenuto_velocity: float = articulate.constants.articulations.TENUTO_VELOCITY_FACTOR
	accent_velocity: float = articulate.constants.articulations.ACCENT_VELOCITY_FACTOR
	max_velocity: float = articulate.constants.velocity.MAX_VELOCITY
	reference_velocity: float = articulate.constants.velocity.DEFAULT_VELOCITY
	min_duration_factor: float = articulate.constants.articulations.MIN_DURATION_FACTOR
	glide_min_steps: int = articulate.constants.articulations.GLIDE_MIN_STEPS
	simple_articulations: typing.Tuple[str, ...] = tuple(articulate.constants.articulations.SIMPLE_ARTICULATIONS)
	complex_articulations: typing.Tuple[typing.Tuple[str, typing.Tuple[str, ...]], ...] = tuple(
		(name, tuple(definition["required"]))
		for name, definition in articulate.constants.articulations.COMPLEX_ARTICULATIONS.items()
	)

	def __post_init__ (self) -> None:

		for name in ("staccato_duration", "staccatissimo_duration", "tenuto_duration", "max_velocity", "min_duration_factor"):
			value = getattr(self, name)
			if not _is_finite_number(value) or value <= 0:
				raise ValueError(f"{name} must be a positive number, got {value!r}")

		for name in ("tenuto_velocity", "accent_velocity"):
			value = getattr(self, name)
			if not _is_finite_number(value) or value < 0:
				raise ValueError(f"{name} must be a non-negative number, got {value!r}")

		if not _is_finite_number(self.reference_velocity) or not 0.0 <= self.reference_velocity <= self.max_velocity:
			raise ValueError(f"reference_velocity must be between 0 and max_velocity, got {self.reference_velocity!r}")

		if isinstance(self.glide_min_steps, bool) or not isinstance(self.glide_min_steps, int) or self.glide_min_steps < 1:
			raise ValueError(f"glide_min_steps must be a positive integer, got {self.glide_min_steps!r}")

	def is_simple (self, name: str) -> bool:

		"""Return True if *name* is a recognised shorthand articulation."""

		return name in self.simple_articulations

	def required_parameters (self, type_name: str) -> typing.Optional[typing.Tuple[str, ...]]:

		"""Return the required parameters for a complex type, or None if unrecognised."""

		for name, required in self.complex_articulations:
			if name == type_name:
				return required
		return None

	def velocity_boost (self, factor: float) -> float:

		"""
		Convert a velocity factor into an additive boost.

		The boost is what lifts the reference velocity to
		``reference_velocity * factor``, so a factor of 1.0 adds nothing.
		"""

		return (factor - 1.0) * self.reference_velocity

	@classmethod
	def from_mapping (cls, data: typing.Optional[typing.Mapping[str, typing.Any]]) -> "ArticulationConfig":

		"""
		Build a config from a plain mapping (e.g. parsed YAML).

		Keys not given keep their defaults. Unknown keys raise ``ValueError``
		so that a typo in a config file is never silently ignored.
		"""

		if not data:
			return cls()

		if not isinstance(data, collections.abc.Mapping):
			raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

		known = {field.name for field in dataclasses.fields(cls)}
		unknown = sorted(set(data) - known)
		if unknown:
			raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

		overrides = dict(data)

		if "simple_articulations" in overrides:
			overrides["simple_articulations"] = tuple(overrides["simple_articulations"])

		if "complex_articulations" in overrides:
			complex_map = overrides["complex_articulations"]
			if not isinstance(complex_map, collections.abc.Mapping):
				raise ValueError("complex_articulations must map type names to required parameter lists")
			overrides["complex_articulations"] = tuple(
				(name, tuple(required or ())) for name, required in complex_map.items()
			)

		return cls(**overrides)


DEFAULT_CONFIG = ArticulationConfig()


def load_config (config_path: str) -> ArticulationConfig:

	"""
	Load an articulation config from a YAML file.

	A missing file is not an error: a warning is logged and the default
	table is returned.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return DEFAULT_CONFIG

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f)

	config = ArticulationConfig.from_mapping(data)
	logger.info(f"Loaded articulation config from {config_path}")
	return config

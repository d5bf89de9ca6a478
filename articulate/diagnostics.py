"""Non-fatal per-note diagnostics.

Anomalies in a single note's articulation data are recorded as
``Diagnostic`` values rather than raised, so one bad entry never stops the
rest of the track from compiling.
"""

import dataclasses
import logging
import typing


logger = logging.getLogger(__name__)


UNKNOWN_ARTICULATION = "unknown_articulation"
MISSING_PARAMETER = "missing_parameter"
INVALID_PARAMETER = "invalid_parameter"
MALFORMED_ARTICULATION = "malformed_articulation"
REST_PITCH_IGNORED = "rest_pitch_ignored"
PITCH_CONFLICT = "pitch_conflict"


@dataclasses.dataclass(frozen=True)
class Diagnostic:

	"""
	A recoverable problem found while compiling one note.
	"""

	index: int
	code: str
	message: str
	articulation: typing.Optional[str] = None

	def to_dict (self) -> typing.Dict[str, typing.Any]:
		return {
			"index": self.index,
			"code": self.code,
			"message": self.message,
			"articulation": self.articulation,
		}


def report (diagnostics: typing.List[Diagnostic], index: int, code: str, message: str, articulation: typing.Optional[str] = None) -> None:

	"""Append a diagnostic to *diagnostics* and log it."""

	diagnostics.append(Diagnostic(index=index, code=code, message=message, articulation=articulation))
	logger.warning(f"Note {index}: {message}")

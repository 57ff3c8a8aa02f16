import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy

from sensornoise.errors import ConfigValidationError

"""
Noise configuration

NoiseConfig is immutable and validated on construction, so an instance that
exists is always safe to hand to the generator.
"""

# Preset files and the original tooling use camelCase keys
FIELD_ALIASES = {
	'luminanceDependent': 'luminance_dependent',
	'microContrast': 'micro_contrast',
}

UNIT_RANGE_FIELDS = ('intensity', 'variance', 'micro_contrast')

def _check_unit_range(field: str, value: Any):
	if isinstance(value, (bool, numpy.bool_)) or not isinstance(value, numbers.Real):
		raise ConfigValidationError(field, value, "must be a number")
	if not math.isfinite(value) or value < 0.0 or value > 1.0:
		raise ConfigValidationError(field, value, "must be between 0 and 1")

@dataclass(frozen=True)
class NoiseConfig:
	"""
	Parameters for sensor noise synthesis.

	Parameters
	----------
	intensity : float, default=0.008
		Base noise standard deviation as a fraction of full scale [0, 1].
		Real sensors sit around 0.003 to 0.015.

	variance : float, default=0.25
		Per-pixel randomization of noise strength [0, 1].
		0.0 = uniform strength across the frame.

	luminance_dependent : bool, default=True
		Scale the shared noise component up in shadows (shot noise).

	micro_contrast : float, default=0.2
		Strength of the global contrast lift applied after compositing [0, 1].

	seed : int, optional
		Non-negative seed. None = different noise on every run.

	smoothing : float, optional
		Post-filter smoothing strength [0, 1]. Validated and carried in preset
		files; the pipeline does not apply it.
	"""

	intensity: float = 0.008
	variance: float = 0.25
	luminance_dependent: bool = True
	micro_contrast: float = 0.2
	seed: Optional[int] = None
	smoothing: Optional[float] = None

	def __post_init__(self):
		self.validate()

	def validate(self):
		"""Raise ConfigValidationError for the first out-of-range field"""
		for field in UNIT_RANGE_FIELDS:
			_check_unit_range(field, getattr(self, field))

		if not isinstance(self.luminance_dependent, (bool, numpy.bool_)):
			raise ConfigValidationError('luminance_dependent', self.luminance_dependent, "must be a boolean")

		if self.seed is not None:
			if isinstance(self.seed, (bool, numpy.bool_)) or not isinstance(self.seed, numbers.Integral):
				raise ConfigValidationError('seed', self.seed, "must be a non-negative integer or None")
			if self.seed < 0:
				raise ConfigValidationError('seed', self.seed, "must be a non-negative integer or None")

		if self.smoothing is not None:
			_check_unit_range('smoothing', self.smoothing)

	def replace(self, **overrides) -> 'NoiseConfig':
		"""Return a validated copy with some fields changed"""
		return dataclasses.replace(self, **overrides)

	@classmethod
	def from_dict(cls, data: Dict[str, Any], base: Optional['NoiseConfig'] = None) -> 'NoiseConfig':
		"""
		Build a config from a mapping with snake_case or camelCase keys.

		Missing keys fall back to ``base`` (or the class defaults).
		"""
		known = {f.name for f in dataclasses.fields(cls)}
		kwargs = {}
		for key, value in data.items():
			name = FIELD_ALIASES.get(key, key)
			if name not in known:
				raise ConfigValidationError(key, value, "is not a recognised setting")
			kwargs[name] = value

		if base is None:
			return cls(**kwargs)
		return base.replace(**kwargs)

	def to_dict(self) -> Dict[str, Any]:
		"""camelCase mapping in preset-file form; unset optional fields are omitted"""
		data = {
			'intensity': self.intensity,
			'variance': self.variance,
			'luminanceDependent': bool(self.luminance_dependent),
			'microContrast': self.micro_contrast,
		}
		if self.seed is not None:
			data['seed'] = int(self.seed)
		if self.smoothing is not None:
			data['smoothing'] = self.smoothing
		return data

import numbers
import warnings
from typing import NamedTuple

import numpy as np
from numba import njit

from sensornoise.config import NoiseConfig
from sensornoise.errors import DimensionError, NumericAnomalyWarning
from sensornoise.seeded_random import SeededRandom, lcg_gaussian, time_seed

"""
Noise field generation

Builds the four per-image float32 fields consumed by the compositor: one
shared base field with per-pixel strength variation, and three per-channel
fields drawn from a second, independent stream.
"""

# Relative per-channel noise. Green is cleanest (twice the photosites on a
# Bayer sensor), blue noisiest (lowest quantum efficiency).
CHANNEL_MULTIPLIERS = (1.0, 0.85, 1.25)
CHANNEL_SCALE = 0.3

@njit
def fill_base_noise(out, state, intensity, variance):
	"""Fill ``out`` with base noise and return the advanced stream state"""
	for i in range(out.shape[0]):
		base_noise, state = lcg_gaussian(state, 0.0, intensity)
		if variance > 0.0:
			spread, state = lcg_gaussian(state, 0.0, variance)
			multiplier = 1.0 + spread
		else:
			multiplier = 1.0
		out[i] = base_noise * multiplier
	return state

@njit
def fill_gaussian_noise(out, state, std_dev):
	"""Fill ``out`` with N(0, std_dev) samples and return the advanced stream state"""
	for i in range(out.shape[0]):
		value, state = lcg_gaussian(state, 0.0, std_dev)
		out[i] = value
	return state

def validate_dimensions(width: int, height: int) -> int:
	"""Return the pixel count, raising DimensionError for empty or non-integer sizes"""
	for name, value in (('width', width), ('height', height)):
		if isinstance(value, bool) or not isinstance(value, numbers.Integral):
			raise DimensionError(f"{name} must be an integer, got {value!r}")
		if value <= 0:
			raise DimensionError(f"{name} must be positive, got {value}")
	return int(width) * int(height)

class NoiseFields(NamedTuple):
	base: np.ndarray
	red: np.ndarray
	green: np.ndarray
	blue: np.ndarray

	@property
	def channels(self):
		return (self.red, self.green, self.blue)

class NoiseFieldGenerator:
	"""
	Generates the base and per-channel noise fields for one image.

	The base stream is seeded with ``config.seed`` and the channel stream with
	``config.seed + 1``. Without a seed, one time-based seed is drawn per call
	and the same offset applied, so the two streams still never coincide. Successive
	unseeded calls draw time seeds at least two apart and never share a stream.

	Parameters
	----------
	config : NoiseConfig
		Validated noise configuration.
	"""

	def __init__(self, config: NoiseConfig):
		self.config = config

	def create_streams(self):
		"""Return fresh (base, channel) random streams for one image"""
		seed = self.config.seed if self.config.seed is not None else time_seed()
		return SeededRandom(seed), SeededRandom(seed + 1)

	def generate_base_field(self, rng: SeededRandom, pixel_count: int) -> np.ndarray:
		field = np.empty(pixel_count, dtype=np.float32)
		rng.state = fill_base_noise(field, rng.state, float(self.config.intensity), float(self.config.variance))
		return field

	def generate_channel_fields(self, rng: SeededRandom, pixel_count: int):
		"""Fill red, then green, then blue from the same stream"""
		fields = []
		for multiplier in CHANNEL_MULTIPLIERS:
			field = np.empty(pixel_count, dtype=np.float32)
			std_dev = self.config.intensity * multiplier * CHANNEL_SCALE
			rng.state = fill_gaussian_noise(field, rng.state, float(std_dev))
			fields.append(field)
		return fields

	def generate(self, width: int, height: int) -> NoiseFields:
		"""
		Generate all four fields for a ``width`` x ``height`` image.

		Returns
		-------
		NoiseFields
			float32 arrays of length width*height in row-major pixel order
		"""
		pixel_count = validate_dimensions(width, height)
		base_rng, channel_rng = self.create_streams()

		base = self.generate_base_field(base_rng, pixel_count)
		red, green, blue = self.generate_channel_fields(channel_rng, pixel_count)
		fields = NoiseFields(base=base, red=red, green=green, blue=blue)

		for name, field in fields._asdict().items():
			non_finite = int(np.count_nonzero(~np.isfinite(field)))
			if non_finite:
				warnings.warn(
					f"{name} noise field has {non_finite} non-finite value(s) from a zero uniform draw",
					NumericAnomalyWarning,
					stacklevel=2
				)

		return fields

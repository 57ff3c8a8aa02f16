import math

import numpy
from numba import njit

"""
Shared image processing utilities
"""

# ITU-R BT.709 luma coefficients
REC709_RED = 0.2126
REC709_GREEN = 0.7152
REC709_BLUE = 0.0722

MIN_LUMINANCE_SCALE = 0.5
MAX_LUMINANCE_SCALE = 2.0

@njit
def rec709_luminance(r, g, b):
	"""Perceptual luminance of an 8-bit RGB triple, in [0, 255]"""
	return REC709_RED * r + REC709_GREEN * g + REC709_BLUE * b

@njit
def luminance_noise_scale(luminance):
	"""
	Noise multiplier for a pixel luminance in [0, 255].

	Shadows get up to twice the noise of highlights, following a 1.5 power
	curve: scale(0) = 2.0, scale(255) = 1.0. Monotonically non-increasing.
	"""
	darkness = 1.0 - luminance / 255.0
	# float accumulation can push luminance a hair past 255
	if darkness < 0.0:
		darkness = 0.0
	scale = 1.0 + darkness ** 1.5
	return max(MIN_LUMINANCE_SCALE, min(MAX_LUMINANCE_SCALE, scale))

@njit
def round_clamp_channel(value):
	"""Round half-up and clamp to a byte. NaN maps to 0."""
	if math.isnan(value):
		return 0
	if value >= 255.0:
		return 255
	if value <= 0.0:
		return 0
	return min(255, int(math.floor(value + 0.5)))

def micro_contrast_coefficients(micro_contrast: float):
	"""Return (multiplier, offset) of the linear contrast lift around mid-grey"""
	multiplier = 1.0 + micro_contrast * 0.1
	offset = -128.0 * (multiplier - 1.0)
	return multiplier, offset

def apply_micro_contrast(pixels: numpy.ndarray, micro_contrast: float) -> numpy.ndarray:
	"""
	Apply a uniform linear contrast lift to every byte of an image.

	Args:
		pixels: uint8 array of any shape
		micro_contrast: Strength [0.0, 1.0]; 0.0 returns an unchanged copy

	Returns:
		New uint8 array, clamp(round(value * multiplier + offset), 0, 255)
	"""
	if micro_contrast <= 0.0:
		return pixels.copy()

	multiplier, offset = micro_contrast_coefficients(micro_contrast)
	adjusted = numpy.floor(pixels.astype(numpy.float64) * multiplier + offset + 0.5)
	return numpy.clip(adjusted, 0, 255).astype(numpy.uint8)

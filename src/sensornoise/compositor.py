import numpy as np
from numba import njit

from sensornoise.config import NoiseConfig
from sensornoise.errors import DimensionError
from sensornoise.image_processing import apply_micro_contrast, luminance_noise_scale, rec709_luminance, round_clamp_channel
from sensornoise.noise_fields import NoiseFields

"""
Pixel compositing - sums noise fields into an 8-bit RGB buffer
"""

@njit
def composite_pixels(pixels, out, base, red, green, blue, luminance_dependent):
	"""
	Add noise to every pixel of a flat (pixel_count, 3) uint8 view.

	Reads ``pixels`` and writes ``out``; the two must not alias.
	"""
	for i in range(pixels.shape[0]):
		r = float(pixels[i, 0])
		g = float(pixels[i, 1])
		b = float(pixels[i, 2])

		base_noise = float(base[i])
		if luminance_dependent:
			base_noise *= luminance_noise_scale(rec709_luminance(r, g, b))

		out[i, 0] = round_clamp_channel(r + (base_noise + float(red[i])) * 255.0)
		out[i, 1] = round_clamp_channel(g + (base_noise + float(green[i])) * 255.0)
		out[i, 2] = round_clamp_channel(b + (base_noise + float(blue[i])) * 255.0)

class PixelCompositor:
	"""
	Composites precomputed noise fields onto an RGB image.

	Luminance scaling is applied to the shared base component only; the
	per-channel components are added unscaled. The micro-contrast lift runs
	once over the whole result afterwards.

	Parameters
	----------
	config : NoiseConfig
		Supplies ``luminance_dependent`` and ``micro_contrast``.
	"""

	def __init__(self, config: NoiseConfig):
		self.config = config

	def composite(self, pixels: np.ndarray, fields: NoiseFields) -> np.ndarray:
		"""
		Add noise to an image.

		Parameters
		----------
		pixels : np.ndarray
			uint8 array of shape (height, width, 3). Not modified.

		fields : NoiseFields
			Fields of length height*width from NoiseFieldGenerator.

		Returns
		-------
		np.ndarray
			New uint8 array with the same shape as ``pixels``
		"""
		if pixels.ndim != 3 or pixels.shape[2] != 3:
			raise DimensionError(f"Expected an (height, width, 3) array, got shape {pixels.shape}")
		if pixels.dtype != np.uint8:
			raise DimensionError(f"Expected uint8 pixels, got {pixels.dtype}")

		pixel_count = pixels.shape[0] * pixels.shape[1]
		for name, field in fields._asdict().items():
			# The kernel does no bounds checking
			if field.shape != (pixel_count,):
				raise DimensionError(f"{name} field has shape {field.shape}, expected ({pixel_count},)")

		flat_in = np.ascontiguousarray(pixels).reshape(pixel_count, 3)
		flat_out = np.empty_like(flat_in)

		composite_pixels(
			flat_in, flat_out,
			fields.base, fields.red, fields.green, fields.blue,
			bool(self.config.luminance_dependent)
		)

		output = flat_out.reshape(pixels.shape)
		if self.config.micro_contrast > 0:
			output = apply_micro_contrast(output, self.config.micro_contrast)
		return output

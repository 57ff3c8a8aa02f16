import time
from pathlib import Path
from typing import NamedTuple, Optional, Union

import numpy
from PIL import Image

from sensornoise.compositor import PixelCompositor
from sensornoise.config import NoiseConfig
from sensornoise.errors import DimensionError
from sensornoise.noise_fields import NoiseFieldGenerator, validate_dimensions
from sensornoise.presets import DEFAULT_CONFIG, create_config
from sensornoise.tools.image_tools import get_pil_save_kwargs, prepare_for_format

"""
Sensor Noise Renderer - Public API

Facade tying noise field generation and compositing together, with thin
Pillow helpers for images and files.
"""

RGB_CHANNELS = 3

class ProcessingResult(NamedTuple):
	input_path: Path
	output_path: Path
	width: int
	height: int
	format: str
	processing_time_ms: float

class SensorNoiseRenderer:
	"""
	Adds realistic camera sensor noise to 8-bit RGB images.

	Noise is Gaussian, stronger in shadows (shot noise), varies in strength
	from pixel to pixel (read noise patterns) and differs per colour channel
	(Bayer quantum efficiency). A subtle contrast lift follows.

	Every render draws fresh noise fields; with a fixed seed the output is
	bit-identical between runs.

	Parameters
	----------
	config : NoiseConfig, optional
		Base configuration. Defaults to the 'normal' preset with no seed.

	**overrides
		Individual NoiseConfig fields to override, e.g. ``seed=42``.
		Overrides set to None are ignored.

	Examples
	--------
	>>> from PIL import Image
	>>> renderer = SensorNoiseRenderer(seed=42)
	>>> img = Image.open("input.png")
	>>> output = renderer.process_image(img)
	>>> output.save("output.png")

	>>> # Start from a preset
	>>> from sensornoise import get_preset
	>>> renderer = SensorNoiseRenderer(get_preset('moderate'), micro_contrast=0.0)
	"""

	def __init__(self, config: Optional[NoiseConfig] = None, **overrides):
		self.config = create_config(config if config is not None else DEFAULT_CONFIG, **overrides)
		self.generator = NoiseFieldGenerator(self.config)
		self.compositor = PixelCompositor(self.config)

	def render_array(self, pixels: numpy.ndarray) -> numpy.ndarray:
		"""
		Add noise to an image array.

		Parameters
		----------
		pixels : np.ndarray
			uint8 array of shape (height, width, 3). Not modified.

		Returns
		-------
		np.ndarray
			New uint8 array of the same shape
		"""
		if pixels.ndim != 3 or pixels.shape[2] != RGB_CHANNELS:
			raise DimensionError(f"Expected an (height, width, 3) array, got shape {pixels.shape}")
		height, width = pixels.shape[:2]
		fields = self.generator.generate(width, height)
		return self.compositor.composite(pixels, fields)

	def render(self, pixel_buffer: Union[bytes, bytearray, memoryview], width: int, height: int, channels: int = RGB_CHANNELS) -> bytes:
		"""
		Add noise to a raw row-major interleaved RGB buffer.

		Parameters
		----------
		pixel_buffer : bytes-like
			width*height*channels bytes. Not modified.

		width, height : int
			Image dimensions, both positive.

		channels : int, default=3
			Must be 3 (RGB).

		Returns
		-------
		bytes
			New buffer with the same length and layout
		"""
		pixel_count = validate_dimensions(width, height)
		if channels != RGB_CHANNELS:
			raise DimensionError(f"Only {RGB_CHANNELS}-channel RGB buffers are supported, got {channels} channels")

		expected = pixel_count * channels
		if len(pixel_buffer) != expected:
			raise DimensionError(f"Pixel buffer has {len(pixel_buffer)} bytes, expected {expected} for {width}x{height}x{channels}")

		pixels = numpy.frombuffer(pixel_buffer, dtype=numpy.uint8).reshape(height, width, channels)
		return self.render_array(pixels).tobytes()

	def process_image(self, pil_image: Image.Image) -> Image.Image:
		"""
		Process a PIL image.

		Greyscale and palette images are converted to RGB. Alpha is split off
		before rendering and re-attached unchanged.

		Parameters
		----------
		pil_image : PIL.Image
			Input image

		Returns
		-------
		PIL.Image
			RGB or RGBA image with noise applied
		"""
		alpha = None
		has_alpha = pil_image.mode in ('RGBA', 'LA', 'PA') or (pil_image.mode == 'P' and 'transparency' in pil_image.info)
		if has_alpha:
			rgba = pil_image.convert('RGBA')
			alpha = rgba.getchannel('A')
			rgb = rgba.convert('RGB')
		elif pil_image.mode != 'RGB':
			rgb = pil_image.convert('RGB')
		else:
			rgb = pil_image

		output = Image.fromarray(self.render_array(numpy.asarray(rgb, dtype=numpy.uint8)))
		if alpha is not None:
			output.putalpha(alpha)
		return output

	def render_from_file(self, input_path: Union[Path, str], output_path: Union[Path, str]) -> ProcessingResult:
		"""
		Render from file to file, keeping ICC profile and EXIF.

		Parameters
		----------
		input_path : Path or str
			Input image file path
		output_path : Path or str
			Output image file path; format follows its extension

		Returns
		-------
		ProcessingResult
		"""
		start_time = time.perf_counter()
		input_path = Path(input_path)
		output_path = Path(output_path)

		with Image.open(input_path) as image:
			image.load()
			width, height = image.size
			image_format = (image.format or 'jpeg').lower()
			output = self.process_image(image)
			save_kwargs = get_pil_save_kwargs(output_path, source_image=image)

		prepare_for_format(output, output_path).save(output_path, **save_kwargs)

		return ProcessingResult(
			input_path=input_path,
			output_path=output_path,
			width=width,
			height=height,
			format=image_format,
			processing_time_ms=(time.perf_counter() - start_time) * 1000.0
		)

def render_sensor_noise(
	pixel_buffer: Union[bytes, bytearray, memoryview],
	width: int,
	height: int,
	config: Optional[NoiseConfig] = None,
	channels: int = RGB_CHANNELS
) -> bytes:
	"""
	Quick function to add sensor noise to a raw RGB buffer.

	This is a convenience wrapper around SensorNoiseRenderer for one-off usage.

	Parameters
	----------
	pixel_buffer : bytes-like
		Row-major interleaved RGB, one byte per channel
	width, height : int
		Image dimensions
	config : NoiseConfig, optional
		Noise configuration; defaults to the 'normal' preset
	channels : int, default=3
		Channel count; must be 3

	Returns
	-------
	bytes
		Noisy buffer of identical shape

	Examples
	--------
	>>> out = render_sensor_noise(bytes([250, 250, 250]), 1, 1, NoiseConfig(intensity=0.0, variance=0.0, micro_contrast=0.0))
	>>> list(out)
	[250, 250, 250]
	"""
	renderer = SensorNoiseRenderer(config)
	return renderer.render(pixel_buffer, width, height, channels)

from pathlib import Path
from typing import Optional

from PIL import Image

"""
Shared image I/O utilities
"""

DEFAULT_JPEG_QUALITY = 95
DEFAULT_WEBP_QUALITY = 95
DEFAULT_PNG_COMPRESS_LEVEL = 6

# Formats Pillow writes without an alpha channel
NO_ALPHA_EXTENSIONS = {'.jpg', '.jpeg'}

def get_pil_save_kwargs(output_path: Path, source_image: Optional[Image.Image] = None) -> dict:
	"""
	Get appropriate save kwargs based on output file format.

	Ensures high quality output after noise has been added:
	- JPEG: quality=95 with 4:4:4 chroma (no subsampling smearing the noise)
	- PNG: compress_level=6 for balanced speed/compression
	- WebP: quality=95, lossy

	When a source image is given, its ICC profile and EXIF block are carried
	over so colour management and camera metadata survive the round trip.

	Args:
		output_path: Path to the output file
		source_image: Image the output was derived from

	Returns:
		Dictionary of kwargs to pass to PIL Image.save()
	"""
	ext = output_path.suffix.lower()

	if ext in ['.jpg', '.jpeg']:
		kwargs = {'quality': DEFAULT_JPEG_QUALITY, 'subsampling': 0}
	elif ext == '.png':
		kwargs = {'compress_level': DEFAULT_PNG_COMPRESS_LEVEL}
	elif ext == '.webp':
		kwargs = {'quality': DEFAULT_WEBP_QUALITY, 'lossless': False}
	else:
		kwargs = {}

	if source_image is not None:
		icc_profile = source_image.info.get('icc_profile')
		if icc_profile:
			kwargs['icc_profile'] = icc_profile
		exif = source_image.getexif()
		if len(exif):
			kwargs['exif'] = exif.tobytes()

	return kwargs

def prepare_for_format(image: Image.Image, output_path: Path) -> Image.Image:
	"""Drop alpha when the output format cannot store it"""
	if output_path.suffix.lower() in NO_ALPHA_EXTENSIONS and image.mode == 'RGBA':
		return image.convert('RGB')
	return image

if __name__ == '__main__':
	print('__main__ not supported in modules.')

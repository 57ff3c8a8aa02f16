from pathlib import Path
from typing import List, Optional, Union

import natsort

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.tiff', '.tif'}

def is_supported_image(path: Union[Path, str]) -> bool:
	return Path(path).suffix.lower() in IMAGE_EXTENSIONS

def list_images(input_dir: Path, recursive: bool = False) -> List[Path]:
	input_dir = Path(input_dir)
	if not input_dir.is_dir():
		raise NotADirectoryError(f"Directory not found: {input_dir}")

	search_glob = '**/*' if recursive else '*'
	image_paths = []

	for file_path in input_dir.glob(search_glob):
		if file_path.is_file() and is_supported_image(file_path):
			image_paths.append(file_path)

	image_paths = list(set(image_paths))

	return natsort.os_sorted(image_paths)

def ensure_directory(dir_path: Union[Path, str]) -> Path:
	"""Create ``dir_path`` if needed; fail if a non-directory is in the way"""
	dir_path = Path(dir_path)
	if dir_path.exists() and not dir_path.is_dir():
		raise NotADirectoryError(f"Path exists but is not a directory: {dir_path}")
	dir_path.mkdir(parents=True, exist_ok=True)
	return dir_path

def get_output_path(input_path: Union[Path, str], output_dir: Union[Path, str], suffix: str = '', input_dir: Optional[Union[Path, str]] = None) -> Path:
	"""
	Output path in ``output_dir`` keeping the input filename, optionally with a stem suffix.

	When ``input_dir`` is given, the input's subdirectories below it are
	mirrored under ``output_dir``.
	"""
	input_path = Path(input_path)
	target_dir = Path(output_dir)
	if input_dir is not None:
		target_dir = target_dir / input_path.parent.relative_to(Path(input_dir))
	return target_dir / f"{input_path.stem}{suffix}{input_path.suffix}"

def format_file_size(num_bytes: int) -> str:
	units = ['B', 'KB', 'MB', 'GB']
	size = float(num_bytes)
	unit_index = 0

	while size >= 1024 and unit_index < len(units) - 1:
		size /= 1024
		unit_index += 1

	return f"{size:.2f} {units[unit_index]}"

def format_time(ms: float) -> str:
	if ms < 1000:
		return f"{int(ms + 0.5)}ms"
	return f"{ms / 1000:.2f}s"

if __name__ == '__main__':
	print('__main__ not supported in modules.')

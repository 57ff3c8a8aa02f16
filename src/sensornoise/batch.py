from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from sensornoise.config import NoiseConfig
from sensornoise.renderer import ProcessingResult, SensorNoiseRenderer

"""
Batch processing - one image at a time, each with its own noise streams
"""

ProgressCallback = Callable[[int, int, ProcessingResult], None]

class BatchResult(NamedTuple):
	results: List[ProcessingResult]
	failed: List[Tuple[Path, str]]

def derive_image_seed(seed: Optional[int], index: int) -> Optional[int]:
	"""
	Per-image seed for image ``index`` (0-based) of a batch.

	Each image consumes two consecutive seeds (base and channel streams), so
	seeds step by two.
	"""
	if seed is None:
		return None
	return seed + 2 * index

def process_image_batch(
	input_paths: Sequence[Union[Path, str]],
	output_paths: Sequence[Union[Path, str]],
	config: NoiseConfig,
	on_progress: Optional[ProgressCallback] = None,
	vary_seed: bool = False,
	stop_on_error: bool = True
) -> BatchResult:
	"""
	Process images in order, writing each to the matching output path.

	Args:
		input_paths: Source image files
		output_paths: Destination files, same length as input_paths
		config: Noise configuration shared by every image
		on_progress: Called as on_progress(current, total, result) after each success
		vary_seed: Give every image a distinct seed derived from config.seed
		stop_on_error: Re-raise the first failure instead of recording it

	Returns:
		BatchResult with successful results and (path, error) pairs for failures
	"""
	if len(input_paths) != len(output_paths):
		raise ValueError(f"Input and output path lists must have the same length ({len(input_paths)} != {len(output_paths)})")

	total = len(input_paths)
	results = []
	failed = []

	for index, (input_path, output_path) in enumerate(zip(input_paths, output_paths)):
		image_config = config
		if vary_seed:
			image_config = config.replace(seed=derive_image_seed(config.seed, index))

		renderer = SensorNoiseRenderer(image_config)
		try:
			result = renderer.render_from_file(input_path, output_path)
		except Exception as e:
			if stop_on_error:
				raise
			failed.append((Path(input_path), str(e)))
			continue

		results.append(result)
		if on_progress is not None:
			on_progress(index + 1, total, result)

	return BatchResult(results=results, failed=failed)

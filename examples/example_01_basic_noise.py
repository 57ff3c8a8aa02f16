from pathlib import Path

import numpy as np
from PIL import Image
from sensornoise import SensorNoiseRenderer

def create_gradient_image() -> Image.Image:
	"""Dark-to-light ramp so the shadow/highlight difference is visible"""
	ramp = np.tile(np.linspace(0, 255, 512), (256, 1)).astype(np.uint8)
	return Image.fromarray(np.stack([ramp] * 3, axis=2))

def apply_basic_noise():
	"""Apply default sensor noise (the 'normal' preset) to a gradient"""
	output_path = Path(__file__).parent / f"{Path(__file__).stem}.png"

	print("Creating gradient test image...")
	image = create_gradient_image()

	print("Applying sensor noise (default settings)...")
	renderer = SensorNoiseRenderer(seed=2016)
	output = renderer.process_image(image)

	print(f"Saving to {output_path.name}...")
	output.save(output_path)
	print("Done!")

if __name__ == "__main__":
	apply_basic_noise()

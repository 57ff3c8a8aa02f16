from pathlib import Path

import numpy as np
from PIL import Image
from sensornoise import PRESETS, SensorNoiseRenderer

def compare_presets():
	"""Render every built-in preset side by side on a mid-grey patch"""
	output_path = Path(__file__).parent / f"{Path(__file__).stem}.png"
	image = Image.new('RGB', (192, 192), (64, 64, 64))

	tiles = []
	for preset in PRESETS.values():
		print(f"Rendering {preset.name}: {preset.description}")
		renderer = SensorNoiseRenderer(preset.settings, seed=7)
		tiles.append(np.asarray(renderer.process_image(image)))

	print(f"Saving to {output_path.name}...")
	Image.fromarray(np.concatenate(tiles, axis=1)).save(output_path)
	print("Done!")

if __name__ == "__main__":
	compare_presets()

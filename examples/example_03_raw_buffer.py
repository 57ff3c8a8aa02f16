from sensornoise import NoiseConfig, render_sensor_noise

def noise_raw_buffer():
	"""Work on raw interleaved RGB bytes, as handed over by any decoder"""
	width, height = 4, 2
	pixels = bytes([30, 30, 30] * (width * height // 2) + [220, 220, 220] * (width * height // 2))

	config = NoiseConfig(intensity=0.015, variance=0.35, micro_contrast=0.0, seed=12345)
	noisy = render_sensor_noise(pixels, width, height, config)

	print(f"Input:  {list(pixels)}")
	print(f"Output: {list(noisy)}")

	# Same seed, same bytes
	assert noisy == render_sensor_noise(pixels, width, height, config)
	print("Reproducible with a fixed seed.")

if __name__ == "__main__":
	noise_raw_buffer()

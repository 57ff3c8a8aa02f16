from .config import NoiseConfig
from .errors import ConfigValidationError, DimensionError, NumericAnomalyWarning
from .presets import DEFAULT_CONFIG, PRESETS, NoisePreset, create_config, get_preset, load_presets
from .renderer import ProcessingResult, SensorNoiseRenderer, render_sensor_noise
from .seeded_random import SeededRandom

"""
SensorNoise - Realistic Camera Sensor Noise

Adds subtle, physically-motivated sensor noise to 8-bit RGB images:
luminance-dependent Gaussian noise with per-pixel strength variation and
per-channel differences, followed by a gentle contrast lift. Deterministic
for a given seed.
"""

__version__ = "0.1.0"

__all__ = [
	"ConfigValidationError",
	"DEFAULT_CONFIG",
	"DimensionError",
	"NoiseConfig",
	"NoisePreset",
	"NumericAnomalyWarning",
	"PRESETS",
	"ProcessingResult",
	"SeededRandom",
	"SensorNoiseRenderer",
	"create_config",
	"get_preset",
	"load_presets",
	"render_sensor_noise",
]

import json
from pathlib import Path
from typing import Dict, NamedTuple, Union

from sensornoise.config import NoiseConfig
from sensornoise.errors import ConfigValidationError

"""
Named noise presets mimicking different camera scenarios
"""

class NoisePreset(NamedTuple):
	name: str
	description: str
	settings: NoiseConfig

PRESETS: Dict[str, NoisePreset] = {
	'subtle': NoisePreset(
		name='Subtle',
		description='Barely perceptible, high-end camera in good light',
		settings=NoiseConfig(intensity=0.004, variance=0.15, luminance_dependent=True, micro_contrast=0.15),
	),
	'normal': NoisePreset(
		name='Normal',
		description='Typical DSLR or mirrorless at ISO 400-800',
		settings=NoiseConfig(intensity=0.008, variance=0.25, luminance_dependent=True, micro_contrast=0.2),
	),
	'moderate': NoisePreset(
		name='Moderate',
		description='ISO 1600-3200 or a smaller consumer sensor',
		settings=NoiseConfig(intensity=0.015, variance=0.35, luminance_dependent=True, micro_contrast=0.25),
	),
	'flat': NoisePreset(
		name='Flat',
		description='Uniform noise with minimal variation across tones',
		settings=NoiseConfig(intensity=0.006, variance=0.05, luminance_dependent=False, micro_contrast=0.1),
	),
}

DEFAULT_PRESET = 'normal'
DEFAULT_CONFIG = PRESETS[DEFAULT_PRESET].settings

def get_preset(name: str, presets: Dict[str, NoisePreset] = None) -> NoiseConfig:
	"""Return the settings of a named preset"""
	presets = PRESETS if presets is None else presets
	if name not in presets:
		raise KeyError(f"Unknown preset: {name}. Available presets: {', '.join(presets)}")
	return presets[name].settings

def create_config(base: NoiseConfig = DEFAULT_CONFIG, **overrides) -> NoiseConfig:
	"""
	Merge overrides onto a base config (the 'normal' preset by default).

	Overrides set to None are ignored.
	"""
	overrides = {key: value for key, value in overrides.items() if value is not None}
	if not overrides:
		return base
	return base.replace(**overrides)

def load_presets(path: Union[Path, str]) -> Dict[str, NoisePreset]:
	"""
	Load presets from a JSON file.

	Accepts either ``{"presets": {key: record}}`` or the bare ``{key: record}``
	mapping, where each record is ``{"name", "description", "settings"}``.
	Every settings block is validated; missing settings fall back to the
	class defaults.
	"""
	path = Path(path)
	with path.open('r', encoding='utf-8') as f:
		data = json.load(f)

	if not isinstance(data, dict):
		raise ValueError(f"Preset file {path} must contain a JSON object")
	records = data.get('presets', data)
	if not isinstance(records, dict):
		raise ValueError(f"'presets' in {path} must be a JSON object")

	presets = {}
	for key, record in records.items():
		if not isinstance(record, dict) or 'settings' not in record:
			raise ValueError(f"Preset '{key}' in {path} is missing its settings")
		try:
			settings = NoiseConfig.from_dict(record['settings'])
		except ConfigValidationError as e:
			raise ConfigValidationError(f"{key}.{e.field}", e.value, e.reason) from e
		presets[key] = NoisePreset(
			name=record.get('name', key),
			description=record.get('description', ''),
			settings=settings,
		)
	return presets

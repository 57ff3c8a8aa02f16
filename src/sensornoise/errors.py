from typing import Any

"""
Error types raised by the noise pipeline
"""

class ConfigValidationError(ValueError):
	"""
	A NoiseConfig field is outside its accepted range.

	Attributes
	----------
	field : str
		Name of the offending configuration field.
	value : Any
		The rejected value.
	"""

	def __init__(self, field: str, value: Any, reason: str):
		self.field = field
		self.value = value
		self.reason = reason
		super().__init__(f"{field} {reason}, got {value!r}")

class DimensionError(ValueError):
	"""Image dimensions or buffer length do not describe a valid pixel buffer"""

class NumericAnomalyWarning(RuntimeWarning):
	"""A generated noise field contains non-finite values"""

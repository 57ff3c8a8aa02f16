import math
import time
from typing import Optional

from numba import njit

"""
Seeded pseudo-random source for noise synthesis

A 32-bit linear congruential generator (Numerical Recipes constants) with a
Box-Muller Gaussian on top. The recurrence lives in njit kernels so the field
generators can run whole images without leaving compiled code; SeededRandom
wraps the same kernels for draw-at-a-time use.
"""

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 4294967296  # 2^32
STATE_MASK = 0xFFFFFFFF

@njit
def lcg_step(state):
	"""Advance a 32-bit LCG state by one step"""
	return (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS

@njit
def lcg_gaussian(state, mean, std_dev):
	"""
	Draw one Gaussian sample, returning (value, new_state).

	Consumes exactly two uniforms. Only the cosine branch of Box-Muller is
	used. A zero first uniform gives an infinite radius and is passed through.
	"""
	state = lcg_step(state)
	u1 = state / 4294967296.0
	state = lcg_step(state)
	u2 = state / 4294967296.0

	if u1 > 0.0:
		radius = math.sqrt(-2.0 * math.log(u1))
	else:
		radius = math.inf

	z0 = radius * math.cos(2.0 * math.pi * u2)
	return mean + z0 * std_dev, state

# Callers seed two streams from one time seed (seed and seed + 1)
TIME_SEED_SPACING = 2
_last_time_seed = None

def time_seed() -> int:
	"""
	Non-reproducible seed from the wall clock (milliseconds, 32-bit).

	Successive calls in a process are at least TIME_SEED_SPACING apart, so
	calls within the same millisecond still get distinct stream pairs.
	"""
	global _last_time_seed
	seed = time.time_ns() // 1_000_000
	if _last_time_seed is not None:
		seed = max(seed, _last_time_seed + TIME_SEED_SPACING)
	_last_time_seed = seed
	return seed & STATE_MASK

class SeededRandom:
	"""
	Uniform and Gaussian draws from a single 32-bit LCG stream.

	Each instance owns its state; two instances never share a stream.

	Parameters
	----------
	seed : int, optional
		Non-negative initial state. Reduced modulo 2^32, which leaves every
		draw unchanged. If omitted, a time-based seed is used.

	Examples
	--------
	>>> rng = SeededRandom(seed=1)
	>>> round(rng.next(), 6)
	0.236456
	"""

	def __init__(self, seed: Optional[int] = None):
		if seed is None:
			seed = time_seed()
		if seed < 0:
			raise ValueError(f"seed must be non-negative, got {seed}")
		self.seed = seed
		self._state = seed & STATE_MASK

	@property
	def state(self) -> int:
		"""Current 32-bit generator state"""
		return self._state

	@state.setter
	def state(self, value: int):
		# Written back by the field kernels after a bulk fill
		self._state = int(value) & STATE_MASK

	def next(self) -> float:
		"""Return the next uniform value in [0, 1)"""
		self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
		return self._state / LCG_MODULUS

	def gaussian(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
		"""Return a normal sample; non-finite if the first uniform drawn is exactly 0"""
		value, self._state = lcg_gaussian(self._state, float(mean), float(std_dev))
		return value

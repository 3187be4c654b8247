"""SCF settings."""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass
class SCFConfig:
	"""
	Settings for an RHF calculation.

	direct: compute two-electron integrals on demand instead of staging them to tei_path
	rank: rank of this process in a multi-process run; rank 0 stages integrals and narrates
	"""

	direct: bool = False
	max_iterations: int = 100
	energy_threshold: float = 1e-8
	density_threshold: float = 1e-6
	diis: bool = True
	diis_start: int = 2
	diis_size: int = 8
	tei_path: str = "tei.npz"
	rank: int = 0

	def __post_init__(self):
		if self.max_iterations < 1:
			raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
		if self.energy_threshold <= 0 or self.density_threshold <= 0:
			raise ValueError("Convergence thresholds must be positive")
		if self.diis_size < 2:
			raise ValueError(f"diis_size must be at least 2, got {self.diis_size}")
		if self.rank < 0:
			raise ValueError(f"rank must be non-negative, got {self.rank}")

	@classmethod
	def from_keywords(cls, keywords: Optional[Mapping[str, Any]] = None) -> "SCFConfig":
		"""
		Build a config from the "scf" section of a keyword mapping.

		Example: {"scf": {"direct": True, "max_iterations": 50}}
		"""
		options = dict((keywords or {}).get("scf", {}))
		known = {f.name for f in fields(cls)}
		unknown = sorted(set(options) - known)
		if unknown:
			raise ValueError(f"Unknown SCF options: {unknown}. Available: {sorted(known)}")

		converted = {}
		for key, value in options.items():
			default = getattr(cls, key)
			if isinstance(default, bool):
				if not isinstance(value, bool):
					raise ValueError(f"SCF option '{key}' must be true or false, got {value!r}")
				converted[key] = value
			else:
				converted[key] = type(default)(value)
		return cls(**converted)

"""Exception types raised while assembling a basis or running an SCF calculation."""


class RHFKitError(Exception):
	"""Base class for all errors raised by rhfkit."""


class UnknownElementError(RHFKitError, KeyError):
	"""Element symbol is not in the periodic table lookup."""

	def __str__(self) -> str:
		return str(self.args[0]) if self.args else ""


class UnknownShellTypeError(RHFKitError, KeyError):
	"""Shell-type label has no angular-momentum code."""

	def __str__(self) -> str:
		return str(self.args[0]) if self.args else ""


class BasisNotFoundError(RHFKitError, KeyError):
	"""No database entry for an (element, basis name) pair."""

	def __str__(self) -> str:
		return str(self.args[0]) if self.args else ""


class DatabaseUnavailableError(RHFKitError, OSError):
	"""The basis-set database could not be opened or has been closed."""


class MalformedRecordError(RHFKitError, ValueError):
	"""A shell record in the database is internally inconsistent."""


class SCFConvergenceError(RHFKitError, RuntimeError):
	"""The SCF iterations did not converge."""

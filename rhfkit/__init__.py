from .assembly import assemble
from .basis import Basis, Shell, expand_shell
from .calculation import run_calculation
from .config import SCFConfig
from .database import open_database, read_shells
from .errors import (
	BasisNotFoundError,
	DatabaseUnavailableError,
	MalformedRecordError,
	RHFKitError,
	SCFConvergenceError,
	UnknownElementError,
	UnknownShellTypeError,
)
from .hartree_fock import HartreeFock, Wavefunction
from .molecule import Atom, Molecule
from .rhf import run

__version__ = "0.1.0"

__all__ = [
	"assemble",
	"run",
	"run_calculation",
	"open_database",
	"read_shells",
	"expand_shell",
	"Atom",
	"Molecule",
	"Shell",
	"Basis",
	"SCFConfig",
	"HartreeFock",
	"Wavefunction",
	"RHFKitError",
	"UnknownElementError",
	"UnknownShellTypeError",
	"BasisNotFoundError",
	"DatabaseUnavailableError",
	"MalformedRecordError",
	"SCFConvergenceError",
]

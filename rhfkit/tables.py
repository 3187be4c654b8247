"""
Static lookup tables for element symbols and basis-set shell types.
"""

from typing import Dict, List, Tuple

from .errors import UnknownElementError, UnknownShellTypeError

_SYMBOLS = (
	"H He "
	"Li Be B C N O F Ne "
	"Na Mg Al Si P S Cl Ar "
	"K Ca Sc Ti V Cr Mn Fe Co Ni Cu Zn Ga Ge As Se Br Kr "
	"Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe "
	"Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu Hf Ta W Re Os Ir Pt Au Hg Tl Pb Bi Po At Rn "
	"Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf Es Fm Md No Lr Rf Db Sg Bh Hs Mt Ds Rg Cn Nh Fl Mc Lv Ts Og"
).split()

ATOMIC_NUMBERS: Dict[str, int] = {symbol: Z for Z, symbol in enumerate(_SYMBOLS, start=1)}

# Combined s+p shell; only ever seen in raw database records
L_SHELL = -1

SHELL_AM: Dict[str, int] = {
	"S": 0,
	"P": 1,
	"D": 2,
	"F": 3,
	"G": 4,
	"H": 5,
	"I": 6,
	"L": L_SHELL,
	"SP": L_SHELL,
}

ANGULAR_LABELS = "spdfghi"


def atomic_number_of(symbol: str) -> int:
	"""Return the atomic number for an element symbol (e.g. 'C' -> 6)."""
	try:
		return ATOMIC_NUMBERS[symbol]
	except KeyError:
		raise UnknownElementError(f"Unknown element symbol: '{symbol}'") from None


def angular_momentum_code_of(shell_type: str) -> int:
	"""
	Map a shell-type label to its angular momentum.

	Args:
		shell_type: Label as stored in the basis-set database ('S', 'P', 'L', ...)

	Returns:
		Angular momentum quantum number, or L_SHELL for a combined s+p shell
	"""
	try:
		return SHELL_AM[shell_type.upper()]
	except (KeyError, AttributeError):
		raise UnknownShellTypeError(
			f"Unknown shell type: '{shell_type}'. Known types: {list(SHELL_AM.keys())}"
		) from None


def cartesian_count(l: int) -> int:  # noqa: E741
	"""Number of Cartesian Gaussian functions in a shell of angular momentum l."""
	if l < 0:
		raise ValueError(f"Angular momentum must be non-negative, got {l}")
	return (l + 1) * (l + 2) // 2


def cartesian_components(l: int) -> List[Tuple[int, int, int]]:  # noqa: E741
	"""Cartesian exponents (lx, ly, lz) for a shell, x-major, e.g. px, py, pz for l=1."""
	components = []
	for lx in range(l, -1, -1):
		for ly in range(l - lx, -1, -1):
			components.append((lx, ly, l - lx - ly))
	return components

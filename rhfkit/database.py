"""
Read-only access to the basis-set database.

The database is a JSON document addressed by "<symbol>/<basis_name>". Each entry maps
a shell index ("1", "2", ...) to a record:

{
    "Shell Type": "S" | "P" | "L" | "D" | ...,
    "Exponents": [...],
    "Coefficients": [...]            # one column
                  | [[c_s, c_p], ...] # two columns, combined-L records only
}
"""

import json
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import BasisNotFoundError, DatabaseUnavailableError, MalformedRecordError

DEFAULT_DATABASE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "basis_sets", "bsed.json")


@dataclass(frozen=True)
class RawShellRecord:
	"""One shell as stored in the database, before L-shell splitting."""

	index: int
	shell_type: str
	exponents: Tuple[float, ...]
	coefficient_columns: Tuple[Tuple[float, ...], ...]


class BasisDatabase:
	"""Handle on an opened basis-set database."""

	def __init__(self, path: str, tree: Dict[str, Any]):
		self.path = path
		self._tree = tree
		self._closed = False

	@property
	def closed(self) -> bool:
		return self._closed

	def close(self) -> None:
		self._closed = True
		self._tree = {}

	def _check_open(self) -> None:
		if self._closed:
			raise DatabaseUnavailableError(f"Basis set database '{self.path}' is closed")

	def keys(self) -> List[str]:
		"""Every "<symbol>/<basis_name>" key in the store."""
		self._check_open()
		return [f"{symbol}/{name}" for symbol, entries in self._tree.items() for name in entries]

	def available_basis_sets(self, symbol: str) -> List[str]:
		"""Basis set names stored for an element."""
		self._check_open()
		return sorted(self._tree.get(symbol, {}).keys())

	def lookup(self, key: str) -> Any:
		"""Resolve a '/'-separated key path to the node stored under it."""
		self._check_open()
		node: Any = self._tree
		for part in key.split("/"):
			if not isinstance(node, dict) or part not in node:
				raise KeyError(key)
			node = node[part]
		return node

	def read_shells(self, symbol: str, basis_name: str) -> List[RawShellRecord]:
		"""
		Read the shell records for one element in one basis set.

		Args:
		    symbol: Element symbol, e.g. "C"
		    basis_name: Basis set name, matched case-insensitively

		Returns:
		    Records ordered by their shell index
		"""
		key = f"{symbol}/{basis_name.lower()}"
		try:
			shells = self.lookup(key)
		except KeyError:
			raise BasisNotFoundError(
				f"Basis set '{basis_name}' not found for {symbol}. "
				f"Available basis sets: {self.available_basis_sets(symbol)}"
			) from None

		if not isinstance(shells, dict):
			raise MalformedRecordError(f"Entry '{key}' is not a mapping of shell records")
		try:
			indices = sorted(shells, key=int)
		except (TypeError, ValueError) as e:
			raise MalformedRecordError(f"Entry '{key}' has a non-integer shell index: {e}") from e

		records = []
		for index in indices:
			records.append(_parse_record(key, int(index), shells[index]))
		logging.debug(f"Read {len(records)} shell records for {key}")
		return records


def _parse_record(key: str, index: int, raw: Dict[str, Any]) -> RawShellRecord:
	try:
		shell_type = raw["Shell Type"]
		exponents = tuple(float(x) for x in raw["Exponents"])
		coefficients = raw["Coefficients"]
	except (KeyError, TypeError, ValueError) as e:
		raise MalformedRecordError(f"Shell {index} of '{key}' is malformed: {e}") from e

	if not exponents:
		raise MalformedRecordError(f"Shell {index} of '{key}' has no primitives")
	if any(a <= 0 for a in exponents):
		raise MalformedRecordError(f"Shell {index} of '{key}' has non-positive exponents: {list(exponents)}")

	try:
		if coefficients and isinstance(coefficients[0], (list, tuple)):
			# one row per primitive, transpose to columns
			columns = tuple(tuple(float(c) for c in column) for column in zip(*coefficients))
			n_rows = len(coefficients)
			if any(len(row) != len(columns) for row in coefficients):
				raise MalformedRecordError(f"Shell {index} of '{key}' has ragged coefficient rows")
		else:
			columns = (tuple(float(c) for c in coefficients),)
			n_rows = len(coefficients)
	except (TypeError, ValueError) as e:
		raise MalformedRecordError(f"Shell {index} of '{key}' has non-numeric coefficients: {e}") from e

	if n_rows != len(exponents):
		raise MalformedRecordError(
			f"Shell {index} of '{key}' has {len(exponents)} exponents but {n_rows} coefficient rows"
		)

	return RawShellRecord(index=index, shell_type=shell_type, exponents=exponents, coefficient_columns=columns)


@contextmanager
def open_database(path: Optional[str] = None) -> Iterator[BasisDatabase]:
	"""
	Open the basis-set database for reading.

	The handle is closed when the block exits, whether or not it raised.

	Args:
	    path: Database file, defaults to the database shipped with the package

	Raises:
	    DatabaseUnavailableError: if the file cannot be read or decoded
	"""
	path = path or DEFAULT_DATABASE_PATH
	try:
		with open(path, "r", encoding="utf-8") as f:
			tree = json.load(f)
	except (OSError, ValueError) as e:
		raise DatabaseUnavailableError(f"Cannot open basis set database '{path}': {e}") from e

	if not isinstance(tree, dict):
		raise DatabaseUnavailableError(f"Basis set database '{path}' does not contain a mapping")

	handle = BasisDatabase(path, tree)
	logging.debug(f"Opened basis set database {path}")
	try:
		yield handle
	finally:
		handle.close()
		logging.debug(f"Closed basis set database {path}")


def read_shells(handle: BasisDatabase, symbol: str, basis_name: str) -> List[RawShellRecord]:
	"""Read the shell records stored for (symbol, basis_name)."""
	return handle.read_shells(symbol, basis_name)


def available_basis_sets(handle: BasisDatabase, symbol: str) -> List[str]:
	"""Return the basis set names stored for an element."""
	return handle.available_basis_sets(symbol)

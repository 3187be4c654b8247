import pytest

from rhfkit.config import SCFConfig


def test_defaults():
	config = SCFConfig()
	assert config.direct is False
	assert config.tei_path == "tei.npz"
	assert config.rank == 0


def test_from_keywords():
	config = SCFConfig.from_keywords({"scf": {"direct": True, "max_iterations": "50", "energy_threshold": 1e-6}})
	assert config.direct is True
	assert config.max_iterations == 50
	assert config.energy_threshold == 1e-6
	assert SCFConfig.from_keywords(None) == SCFConfig()
	assert SCFConfig.from_keywords({"output": "verbose"}) == SCFConfig()


def test_unknown_option():
	with pytest.raises(ValueError, match="Unknown SCF options"):
		SCFConfig.from_keywords({"scf": {"dirct": True}})


def test_invalid_values():
	with pytest.raises(ValueError):
		SCFConfig.from_keywords({"scf": {"direct": "yes"}})
	with pytest.raises(ValueError):
		SCFConfig(max_iterations=0)
	with pytest.raises(ValueError):
		SCFConfig(density_threshold=-1.0)
	with pytest.raises(ValueError):
		SCFConfig(diis_size=1)

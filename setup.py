from setuptools import find_packages, setup

setup(
	name="rhfkit",
	version="0.1.0",
	packages=find_packages(exclude=["tests", "tests.*"]),
	package_data={"rhfkit": ["basis_sets/*.json"]},
	install_requires=[
		"numpy>=1.21.0",
		"scipy>=1.7.0",
	],
	extras_require={
		"dev": [
			"pytest>=7.0.0",
		],
	},
	author="Justin Kirkland",
	description="Basis set assembly and restricted Hartree-Fock SCF calculations",
	python_requires=">=3.7",
)

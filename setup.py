"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='casework',
	version='0.1.0',
	packages=['casework'],
	entry_points={
		'console_scripts': ["casework = casework.cmdline:main"],
	},
	license='MIT',
	description='Exhaustive case-analysis over tagged-union values, for a language without pattern-matching of its own',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Libraries",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		"test": ["pytest"],
	},
)

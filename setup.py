"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='umbra-shader',
	version='0.1.0',
	packages=['umbra'],
	entry_points={
		'console_scripts': ["umbra = umbra.cmdline:main"],
	},
	license='MIT',
	description='Shader programs written as S-expressions, translated into GLSL-flavored source text',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Topic :: Multimedia :: Graphics :: 3D Rendering",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)

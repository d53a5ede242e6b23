from setuptools import setup, find_packages
import codecs
import os

here = os.path.abspath(os.path.dirname(__file__))

with codecs.open(os.path.join(here, "README.md"), encoding="utf-8") as fh:
    long_description = "\n" + fh.read()

VERSION = '0.1.0'
DESCRIPTION = 'Convert Wavefront OBJ meshes to binary STL'
LONG_DESCRIPTION = 'A package that triangulates OBJ polygon meshes, writes STL files and measures area, volume and point containment.'

# Setting up
setup(
    name="meshconv",
    version=VERSION,
    description=DESCRIPTION,
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=['numpy'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['meshconv=meshconv.cli:main'],
    },
    keywords=['python', 'three dimensional', 'obj', 'stl', 'mesh', '3d', 'converter'],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Operating System :: Unix",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
    ]
)

# coding: utf-8

"""Setup file for PyPI"""

from setuptools import setup, find_packages
from codecs import open
from os import path
import glob
import sys


here = path.abspath(path.dirname(__file__))

with open(path.join(here, "DESCRIPTION.md"), encoding="utf-8") as description:
    long_description = description.read()

version = {}
with open(path.join(here, "Comparo", "version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

if version is None:
    print("No version found, exiting", file=sys.stderr)
    sys.exit(1)

if sys.version_info.major != 3:
    raise EnvironmentError("""Comparo is specifically programmed for python3,
    and is not compatible with Python2. Please upgrade your python before proceeding!""")

setup(
    name="Comparo",
    version=version,
    description="A Python3 program to compare a predicted gene annotation against a reference one",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="LGPL3",
    python_requires=">=3.7",
    tests_require=["pytest"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Framework :: Pytest",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
    ],
    zip_safe=False,
    keywords="annotation genomics comparison parseval",
    packages=find_packages(include=["Comparo", "Comparo.*"]),
    entry_points={"console_scripts": ["comparo = Comparo.__main__:main"]},
    install_requires=[line.rstrip() for line in open(path.join(here, "requirements.txt"), "rt")
                      if line.strip() and not line.startswith("#")],
    extras_require={
        "test": ["pytest"]
    },
    package_data={
        "Comparo.tests": glob.glob(path.join("Comparo", "tests", "*gff3"))
        },
    include_package_data=True
)

import os

from setuptools import setup, find_packages

version_file = os.path.join(os.path.dirname(__file__), "bitio", "version.py")
with open(version_file, "r") as f:
    exec(f.read())

readme_file = os.path.join(os.path.dirname(__file__), "README.md")
with open(readme_file, "r") as f:
    long_description = f.read()

setup(
    name="bitio",
    version=__version__,  # noqa: F821 -- loaded by 'exec' above
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    description="Bit-level reading and writing for binary file-like objects.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0-only",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
    ],
    keywords="bit bitstream bit-packing io",
    python_requires=">=3.6",
    install_requires=[
        "bitarray",
    ],
    extras_require={
        "test": [
            "pytest",
            "mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "bitio-dump=bitio.scripts.bitio_dump:main",
        ],
    },
)

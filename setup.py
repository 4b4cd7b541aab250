"""

Setup configuration for the Terrain Constructor package.

Version 0.2.0 - Pipeline documents, OBJ export and the command-line front end
on top of the procedural mesh operations.
"""

from setuptools import find_packages, setup

setup(
    name="terrainconstructor",
    version="0.2.0",
    packages=find_packages(include=["tcon", "tcon.*"]),
    py_modules=["tcon_cli"],
    install_requires=[
        "numpy>=1.20.0",
        "noise>=1.2.2",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tcon=tcon.cli.main:main",
        ],
    },
    description="Procedural terrain meshes from replayable pipelines of mesh operations",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics :: 3D Modeling",
    ],
    python_requires=">=3.8",
)

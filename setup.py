from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="seamcut",
    version="0.1.0",
    description="Minimum-cost image seams via max-flow / min-cut on pixel grids.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "networkx",
        "Pillow",
        "PyYAML",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["seamcut=seamcut.cli:main"]},
)

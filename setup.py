import setuptools


def read_readme():
    with open("README.md", "r", encoding="utf-8") as fh:
        readme = fh.read()
    return readme


def read_version():
    """Read the version string from `VERSION`.

    Version strings need to comply with PEP 440.
    """
    with open("VERSION", "r", encoding="utf-8") as fh:
        version = fh.read().strip()
    if version[0] == "v":
        version = version[1:]
    return version


setuptools.setup(
    name="vetocore",
    version=read_version(),
    description="Python implementations of the proportional veto core and veto coalitions",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    license="MIT License",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Science/Research",
    ],
    packages=["vetocore"],
    python_requires=">=3.9",
    setup_requires=[
        "wheel",
    ],
    install_requires=[
        "numpy>=1.22",
        "ortools>=9.4",
        "ruamel.yaml >= 0.16.13",
        "preflibtools>=2.0.9",
        "prefsampling>=0.1.16",
    ],
    extras_require={
        "gmpy2": ["gmpy2>=2.1"],
        "dev": [
            "pytest>=6",
            "coverage[toml]>=5.3",
            "black>=22.1.0",
        ],
    },
)

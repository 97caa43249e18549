from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="cspf",
    version="0.1.0",
    description="Constrained Shortest Path First over tagged directed graphs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "dev", "examples")),
    python_requires=">=3.13",
    install_requires=["networkx"],
    extras_require={
        "test": ["pytest"],
        "dev": ["line_profiler"],
    },
    tests_require=["pytest", "networkx"],
)

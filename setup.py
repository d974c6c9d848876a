import re

import setuptools


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Version string of hashgraph/__version__.py
with open("hashgraph/__version__.py", "r", encoding="utf-8") as fh:
    version = re.search(r'__version__ = "(?P<version>[^"]+)"', fh.read()).group("version")

setuptools.setup(
    name="hashgraph",
    author="MapleCCC",
    author_email="littlelittlemaple@gmail.com",
    description="Minimum spanning trees over hash-indexed adjacency graphs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version=version,
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=open("requirements/install.txt", "r").read().splitlines(),
    extras_require={"test": open("requirements/test.txt", "r").read().splitlines()},
    entry_points={"console_scripts": ["hashgraph-mst=hashgraph.__main__:main"]},
)

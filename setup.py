from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="roadroute",
    version="0.3.0",
    description="Traffic-aware shortest-path routing over a road network.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={
        "roadroute.schemas": ["*.json"],
        "roadroute.data": ["*.yaml"],
    },
    python_requires=">=3.10",
    install_requires=[
        "networkx>=3.0",
        "pyyaml>=6.0",
        "jsonschema>=4.0",
        "pandas>=2.0",
        "dacite>=1.8",
        "fastapi>=0.100",
        "pydantic>=2.0",
        "uvicorn>=0.20",
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
    entry_points={
        "console_scripts": ["roadroute=roadroute.cli:main"],
    },
)

"""
schemagen - Schema type mapping and MagicObject class generator
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="schemagen",
    version="1.0.0",
    author="schemagen contributors",
    author_email="",
    description="Map database column types across dialects and generate MagicObject entity, DTO and validator classes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["schemagen", "schemagen.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Database",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "schemagen=schemagen.cli:main",
        ],
    },
    keywords="database, schema, type-mapping, mysql, postgresql, sqlite, code-generator, php",
)

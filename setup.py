"""
Setup script for wakachi package.

wakachi is a small HTTP service exposing morphological tokenization
(Japanese word segmentation with SudachiPy) to other processes.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="wakachi",
    version="0.1.0",
    author="Noyu Ritsuji",
    author_email="",
    description="Morphological tokenization over HTTP",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/noyuri2z/wakachi",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: FastAPI",
        "Topic :: Text Processing :: Linguistic",
        "Natural Language :: Japanese",
        "Natural Language :: English",
    ],
    python_requires=">=3.8",
    install_requires=[
        "fastapi>=0.95.0",
        "uvicorn>=0.20.0",
        "sudachipy>=0.6.8",
        "sudachidict_core>=20230927",
    ],
    extras_require={
        "full": [
            "sudachidict_small>=20230927",
            "sudachidict_full>=20230927",
        ],
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "httpx>=0.23.0",
            "black>=21.0",
            "flake8>=3.9",
            "mypy>=0.900",
        ],
    },
    entry_points={
        "console_scripts": [
            "wakachi-server=wakachi.cli:main",
        ],
    },
    keywords=[
        "tokenizer",
        "morphological analysis",
        "sudachi",
        "japanese",
        "nlp",
        "http",
        "fastapi",
    ],
)

from __future__ import annotations

from setuptools import find_packages, setup

from config.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

if __name__ == "__main__":
    setup(
        name="feedmixer",
        version=PROJECT_VERSION,
        description="Aggregation service interleaving a content feed with advertisements",
        python_requires=PYTHON_REQUIRES_SPECIFIER,
        packages=find_packages(include=["feedmixer", "feedmixer.*", "config"]),
        py_modules=["main"],
        install_requires=[
            "fastapi>=0.110",
            "httpx>=0.27",
            "pydantic>=2.5",
            "loguru>=0.7",
            "python-dotenv>=1.0",
            "uvicorn>=0.27",
            "tomli>=2.0; python_version < '3.11'",
        ],
        extras_require={
            "test": [
                "pytest>=8.0",
                "hypothesis>=6.90",
                "anyio>=4.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "feedmixer=main:main",
                "feedmixer-config=feedmixer.config_manager:main",
            ],
        },
    )

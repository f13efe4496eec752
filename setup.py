# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Setup configuration for the akv-secrets package."""

from setuptools import find_packages, setup

setup(
    name="akv-secrets",
    version="0.1.0",
    description="Resolve Azure Key Vault secrets and certificates into controller payloads",
    author="akv-secrets contributors",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "azure-core>=1.29.0",
        "azure-identity>=1.16.1",
        "azure-keyvault-certificates>=4.7.0",
        "azure-keyvault-keys>=4.9.0",
        "azure-keyvault-secrets>=4.7.0",
        "cryptography>=42.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)

"""Setup script for docker-image-ctl CLI"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="docker-image-ctl",
    version="0.1.0",
    author="Docker Image Control",
    author_email="admin@localhost.local",
    description="Interactive resolver for container image build and push configuration",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0",
        "docker>=6.0",
        "requests>=2.28",
        "pyyaml>=6.0",
        "tabulate>=0.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "docker-image-ctl=docker_image_ctl.cli:cli",
            "dictl=docker_image_ctl.cli:cli",  # Short alias
        ],
    },
)

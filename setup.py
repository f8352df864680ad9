"""
===============================================================================
Setup Script for Project Packaging and Distribution
===============================================================================
Manages project metadata, dependencies, and distribution packaging.
"""

from setuptools import setup, find_packages

setup(
    name="flue-frontend",  # Project name
    version="1.0.0",   # Version
    description="Server-rendered web frontend for the Flue image generation backend",
    packages=find_packages(include=[
        "utils",
        "routes",
        "utils.*",
        "routes.*"
    ]),
    py_modules=["app"],
    include_package_data=True,
    install_requires=[
        "flask",
        "requests",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'flue-frontend=app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.8',
)

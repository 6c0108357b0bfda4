# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mcworldfinder",
    version="0.3.0",
    description="Find every Minecraft save world (folders containing level.dat) on a machine",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["mcworldfinder*"]),
    package_data={
        "mcworldfinder": ["interface/locales/*.json"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'mcworldfinder=mcworldfinder.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
)

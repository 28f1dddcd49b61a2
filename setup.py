# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="logweave",
    version="1.0.0",
    description="Per-category JSON file loggers with size or time based rotation",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["logweave", "logweave.*"]),
    install_requires=[
        "python-json-logger>=3.1",  # JsonFormatter base of the layout formatter
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'logweave=logweave.interface.cli.app:main',  # Inspect or exercise a logging setup
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

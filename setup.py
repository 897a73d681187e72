# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="lanoma",
    version="0.1.0",
    description="Manage hierarchical LaTeX notes and compile them in parallel",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["lanoma", "lanoma.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'lanoma=lanoma.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

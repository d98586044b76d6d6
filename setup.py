# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="chainlog",
    version="1.0.0",
    description="Chainable logger configuration with clone-on-first-configure semantics",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["chainlog", "chainlog.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",  # HttpWriter sink
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'chainlog=chainlog.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

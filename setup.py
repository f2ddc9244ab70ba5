from setuptools import find_packages, setup

setup(
    name="pathwatcher",
    version="0.1.0",
    description="Watch a single file or directory and forward its change events to one handler",
    author="Araray Velho",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "click",
        "toml",
        "pyyaml",
        "rich",
        "watchdog>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pathwatcher=pathwatcher.cli:main"
        ]
    },
)

# setup.py
from setuptools import setup, find_packages

setup(
    name="haschema",
    version="0.1.0",
    description="A minimal S-expression reader and arithmetic evaluator",
    packages=find_packages(include=["haschema", "haschema.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["haschema=haschema.__main__:main"],
    },
    zip_safe=False,
)

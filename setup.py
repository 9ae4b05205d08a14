from setuptools import setup, find_packages
from os import path
from io import open

setup_dir = path.abspath(path.dirname(__file__))
with open(path.join(setup_dir, 'README.md'),
          encoding='utf-8') as readme_file:
    long_description = readme_file.read()

setup(
    name="tinyfst",
    version="0.1",
    packages=find_packages(include=["tinyfst", "tinyfst.*"]),
    python_requires=">=3.8",

    install_requires=[
        "numpy>=1.22"
    ],

    extras_require={
        "test": ["pytest"]
    },

    entry_points={
        "console_scripts": [
            "tinyfst = tinyfst.cli:main"
        ]
    },

    license="MIT",
    description="""Read weighted finite-state transducers in AT&T text
    format into compact, array-indexed automata""",

    long_description=long_description,
    long_description_content_type="text/markdown"
)

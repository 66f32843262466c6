import os

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "readme.md"), "r") as fh:
    long_description = fh.read()

setup(
    name='uvr-server',
    version='1.0.0',
    license='MIT',
    description='A management back end for a vehicle rental business.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires='>=3.8',
    install_requires=[
        'aiohttp>=3.8,<4',
        'aiohttp-cors',
        'aiohttp-apispec',
        'apispec',
        'marshmallow>=3.13,<4',
        'marshmallow-jsonschema',
        'tortoise-orm>=0.19',
        'sentry-sdk',
        'uvloop',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-aiohttp>=1.0',
            'pytest-asyncio',
            'faker',
        ],
    },
    entry_points={
        'console_scripts': ['uvr=uvr.cli:run'],
    },
)

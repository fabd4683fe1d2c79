# setup.py
from setuptools import setup, find_packages

setup(
    name='viewmod',
    version='0.1.0',
    description='Composable, immutable view modifiers with cascading styles and state-driven re-rendering.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # Finds the `viewmod` and `viewmod_cli` packages
    packages=find_packages(exclude=['tests', 'tests.*']),

    install_requires=[
        'PyYAML',
        'typer',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Creates an executable script named `viewmod` that calls the `app`
    # object inside `viewmod_cli.main`.
    entry_points={
        'console_scripts': [
            'viewmod = viewmod_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)

from setuptools import setup
import os

README_PATH = os.path.join(os.path.abspath(os.path.dirname(__file__)), 'README.md')
with open(README_PATH) as readme_file:
    README = readme_file.read()

setup(
    name='pypaoa',
    version='0.1.0',
    description='Probabilistic approximate optimization (PAOA) for MAXCUT: stochastic Markov-gate circuits tuned by SPSA',
    long_description=README,
    long_description_content_type='text/markdown',
    license="LGPL-3.0-or-later",
    classifiers=[
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering",
    ],
    packages=['pypaoa'],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'numba',
        'networkx',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=False,
)

from setuptools import setup

setup(
    name='pybedgraph',
    version='0.1.0',
    description='Rolling statistics, robust normalization and merging of BedGraph tracks',
    install_requires=['pandas', 'numpy>=1.20'],
    extras_require={
        'test': ['pytest'],
    },
    packages=['pybedgraph'],
    entry_points={
        'console_scripts': [
            'pybedgraph=pybedgraph.cli:main',
        ],
    },
    python_requires='>=3.10',
    zip_safe=False
)

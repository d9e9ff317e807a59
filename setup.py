"""setuptools build configuration for the safe-zone layout engine.

Usage:
    pip install -e .            # engine + Pillow preview
    pip install -e ".[test]"    # plus pytest

Produces importable flat modules and the ``layout-bench`` console script.
"""
from setuptools import setup

MODULES = [
    'models',
    'zones',
    'intent',
    'fitter',
    'ranker',
    'emphasis',
    'engine',
    'preview',
    'layout_bench',
]

setup(
    name='safezone-layout',
    version='1.0.0',
    description='Deterministic text placement around an image on a fixed canvas',
    py_modules=MODULES,
    python_requires='>=3.10',
    install_requires=['Pillow>=10.1'],
    extras_require={'test': ['pytest']},
    entry_points={
        'console_scripts': ['layout-bench=layout_bench:main'],
    },
)

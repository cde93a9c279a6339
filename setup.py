"""
Setup script for Workout Map
Run: pip install -e .[tests]
macOS app bundle: python setup.py py2app
"""

import sys

from setuptools import find_namespace_packages, setup

APP = ['app.py']
DATA_FILES = []
OPTIONS = {
    'argv_emulation': True,
    'packages': ['nicegui', 'pandas', 'webview'],
    'strip': True,
    'compressed': True,
}

py2app_kwargs = {}
if sys.platform == 'darwin' and 'py2app' in sys.argv:
    py2app_kwargs = {
        'app': APP,
        'data_files': DATA_FILES,
        'options': {'py2app': OPTIONS},
        'setup_requires': ['py2app'],
    }

setup(
    name='workout-map',
    version='1.0.0',
    description='Log running and cycling workouts on an interactive map',
    python_requires='>=3.9',
    py_modules=['app', 'constants', 'db', 'state'],
    packages=find_namespace_packages(include=['core', 'components']),
    install_requires=[
        'nicegui>=2.0',
        'pandas',
        'pywebview',
    ],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': ['workout-map=app:main'],
    },
    **py2app_kwargs,
)

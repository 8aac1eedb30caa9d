"""Packaging for TamoStudy.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,  # Replace with .icns path when a proper icon exists
    "plist": {
        "CFBundleName": "TamoStudy",
        "CFBundleDisplayName": "TamoStudy",
        "CFBundleIdentifier": "com.tamostudy.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

app_kwargs = {}
if "py2app" in sys.argv:
    app_kwargs = dict(
        app=["main.py"],
        data_files=[],
        options={"py2app": OPTIONS},
    )

setup(
    name="TamoStudy",
    version="0.1.0",
    description="Virtual pet study companion with a focus timer",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["tamostudy=tamostudy.__main__:main"],
    },
    **app_kwargs,
)

#!/usr/bin/env python3
from setuptools import setup

setup(
    name="driveblob",
    version="1.0",
    packages=["driveblob", "driveblob.commands"],
    url="",
    license="",
    author="",
    author_email="",
    description="Name-keyed blob storage in a Google Drive application "
                "data folder",
    python_requires=">=3.8",
    install_requires=[
        "Django",
        "requests",
        "google-auth",
        "pytz",
        "colorlog",
    ],
    entry_points={"console_scripts": ["driveblob=driveblob.main:main"]},
)

from setuptools import setup, find_packages
import os

if os.path.exists("src/filterhunt/version.txt"):
    with open("src/filterhunt/version.txt") as f:
        version = f.read().strip()
else:
    version = "0.0.1"

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="filterhunt",
    version=version,
    description="Enumerate and remove WMI event filters across every namespace",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"filterhunt": ["version.txt"]},
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python :: 3",
        "Topic :: Security",
    ],
    python_requires=">=3.8",
    install_requires=[
        "click>=8.0",
        "coloredlogs",
        "pyyaml",
        "rich",
        "pywin32; sys_platform == 'win32'",
        "wmi; sys_platform == 'win32'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "filterhunt=filterhunt.__main__:main",
        ],
    },
)

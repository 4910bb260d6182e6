from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


HERE = Path(__file__).resolve().parent
PACKAGE = "classroll"


def _text(name: str) -> str:
    path = HERE / name
    return path.read_text(encoding="utf-8").strip() if path.is_file() else ""


def _requirements(name: str) -> list[str]:
    """
    Requirement specifiers from a requirements file, skipping comments and `-r` includes.
    """
    return [
        line.strip()
        for line in _text(name).splitlines()
        if line.strip() and not line.strip().startswith(("#", "-r"))
    ]


setup(
    name=PACKAGE,
    version=_text(f"{PACKAGE}/VERSION") or "0.1.0",
    description="Class rosters, attendance marks and random student picks (CLI + interactive menu)",
    long_description=_text("README.md"),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={PACKAGE: ["VERSION"]},
    install_requires=_requirements("requirements.txt"),
    extras_require={"dev": _requirements("requirements-dev.txt")},
    entry_points={"console_scripts": [f"{PACKAGE}={PACKAGE}.cli:main"]},
)

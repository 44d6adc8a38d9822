# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- CONFIG & MODELS ---
    "pydantic>=2.0.0",
    "pyyaml>=6.0.0",
    "python-dotenv>=1.0.0",

    # --- CONSOLE ---
    "rich>=13.0.0",
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest",
        "pytest-asyncio>=0.23",
    ],
}

setup(
    name="NavKit",
    version="0.1.0",
    description="NavKit|Awaitable cross-module navigation results",
    packages=find_packages(include=["navkit", "navkit.*"]),
    include_package_data=True,
    package_data={"navkit": ["shared/config/settings/*.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={"console_scripts": ["navkit-demo=navkit.demo.main:main"]},
    python_requires=">=3.11",
)

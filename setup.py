# setup.py
from setuptools import setup, find_packages

setup(
    name="site-harvest",
    version="0.1.0",
    description="Обнаружение страниц сайта и извлечение чистого текста SiteHarvest",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"site_harvest": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=4.9",
        "readability-lxml>=0.8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4,<9",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-harvest=site_harvest.cli:cli",
        ],
    },
    python_requires=">=3.11",
)

# setup.py
from setuptools import setup, find_packages

setup(
    name="site-graph",
    version="0.1.0",
    description="Асинхронный краулер SiteGraph: метаданные страниц и граф ссылок одного сайта",
    packages=find_packages(include=["site_graph", "site_graph.*"]),
    package_data={"site_graph": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "browser": ["playwright>=1.40"],
        "test": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
    entry_points={
        "console_scripts": ["site-graph=site_graph.cli:cli"],
    },
    python_requires=">=3.11",
)

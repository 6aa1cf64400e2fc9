from setuptools import setup, find_packages
import re

# Read version from taxcompare/__init__.py
with open('taxcompare/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='taxcompare',
    version=version,
    packages=find_packages(include=['taxcompare', 'taxcompare.*']),
    package_data={
        'taxcompare': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'tax-compare=taxcompare.cli.__main__:main',
            'tax-compare-mcp=taxcompare.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Compare salary tax outcomes across national tax regimes.',
    python_requires='>=3.10',
)

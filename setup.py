from setuptools import setup, find_packages

# Read requirements from requirements.txt
with open('requirements.txt', 'r') as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

setup(
    name="broker-ledger",
    version="0.1.0",
    description="Broker Ledger - Brokerage statement parsing and cash reconciliation",
    author="Your Name",
    author_email="your.email@example.com",
    packages=find_packages(include=['broker_ledger', 'broker_ledger.*']),
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.9.0',
            'ruff>=0.1.0',
        ]
    },
    entry_points={
        'console_scripts': [
            'ledger=broker_ledger.cli:main',
        ],
    },
    python_requires='>=3.11',
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.11",
    ],
)

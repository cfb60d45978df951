from setuptools import setup, find_packages

setup(
    name             = "stock-composite-report",
    version          = "1.0.0",
    description      = "Historical stock price cleaning, returns, correlation and composite charts",
    packages         = find_packages(include=["src", "src.*"]),
    py_modules       = ["main"],
    python_requires  = ">=3.10",
    install_requires = [
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "matplotlib>=3.7.0",
    ],
    extras_require   = {
        "test": ["pytest>=7.0"],
    },
    entry_points     = {
        "console_scripts": ["stock-report = main:main"]
    },
    classifiers      = [
        "Programming Language :: Python :: 3",
        "Topic :: Office/Business :: Financial",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
)

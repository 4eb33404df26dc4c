from setuptools import setup, find_packages

setup(
    name="canvascluster",
    version="1.0.0",
    description="canvascluster: far-zoom spatial cluster summaries for node-graph canvases",
    author="canvascluster Team",
    packages=find_packages(include=["canvascluster", "canvascluster.*"]),
    install_requires=[
        "networkx>=3.1",
        "numpy>=1.24.0",
        "matplotlib>=3.7.0",
        "pyyaml>=6.0.0",
        "pydantic>=2.0.0",
        "scikit-learn>=1.3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
    ],
    entry_points={
        "console_scripts": [
            "canvascluster=canvascluster.cli:main",
        ],
    },
)

from setuptools import setup, find_packages

setup(
    name="setboard_core",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    py_modules=["main"],
    package_data={"desktop_ui": ["qml/*.qml"]},
    install_requires=[
        "python-dotenv>=1.0.0",
        "PySide6>=6.7",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    python_requires=">=3.10",
)

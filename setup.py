from setuptools import setup, find_namespace_packages

setup(
    name="geo_distance_matrix",   # 패키지 이름
    version="0.1.0",
    packages=find_namespace_packages(include=["src", "src.*", "config"]),
    py_modules=["run_distances"],
    install_requires=[
        "numpy",
        "pandas",
        "geopy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)

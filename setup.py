from setuptools import find_packages, setup

setup(
    name="TreeCrownKernels",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "scikit-learn",
        "pandas",
        "tqdm",
    ],
    extras_require={
        "viz": ["open3d"],
        "test": ["pytest"],
    },
    description="Crown-shaped kernel weights and mode clustering for airborne LiDAR point clouds",
    python_requires=">=3.8",
)

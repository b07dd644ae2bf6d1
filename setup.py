from setuptools import setup, find_packages

setup(
    name="batch-image-resizer",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"batch_resizer": ["config/*.yaml"]},
    install_requires=[
        "Pillow",
        "opencv-python",
        "numpy",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "batch-resizer=batch_resizer.main:main",
        ],
    },
)

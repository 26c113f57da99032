from setuptools import setup, find_packages

setup(
    name="pvx-arcade",
    version="0.1.0",
    description="PixelVault Arcade: a proof-of-work learning game engine (Hashlord)",
    packages=find_packages(include=["pvx_arcade*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "jax>=0.4.0",
        "jaxlib>=0.4.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "pvx-arcade=pvx_arcade.main:main",
        ],
    },
)

from setuptools import find_packages, setup

install_requires = [
    "torch",
    "numpy",
    "loguru",
    "joblib",
    "mpmath",
]

extras_require = {
    "test": [
        "pytest",
        "scipy",
    ],
}

if __name__ == "__main__":
    setup(
        name="mrprime",
        version="0.1.0",
        description="Miller-Rabin probabilistic primality testing with a ChaCha20 CSPRNG.",
        package_dir={"": "src"},
        packages=find_packages("src"),
        python_requires=">=3.10",
        install_requires=install_requires,
        extras_require=extras_require,
        entry_points={
            "console_scripts": [
                "mrprime=mrprime.cli:main",
            ],
        },
    )

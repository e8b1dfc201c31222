""" thorsig build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import thorsig

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=thorsig.name,
    version=thorsig.__version__,
    license=thorsig.__license__,
    author=thorsig.__author__,
    author_email=thorsig.__author_email__,
    description="Recoverable ECDSA signatures and public key recovery",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["ecdsa>=0.18"],
    extras_require={
        "secp256k1": ["btclib_libsecp256k1"],
        "test": ["pytest", "coincurve>=18"],
    },
    keywords=(
        "cryptography elliptic-curves ecdsa secp256k1 "
        "public-key-recovery recoverable-signature blake2b"
    ),
    python_requires=">=3.7",
    classifiers=[
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)

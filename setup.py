from setuptools import setup, find_packages

setup(
    name="netlocator",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "toml",
        "rumps; sys_platform == 'darwin'",
        "pyobjc-framework-CoreWLAN; sys_platform == 'darwin'",
        "pyobjc-framework-SystemConfiguration; sys_platform == 'darwin'",
    ],
    extras_require={
        "pac": ["pacparser"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "netlocator=netlocator.cli:cli",
        ],
    },
    python_requires=">=3.9",
    description="Work/non-work network location switching for macOS",
    long_description="A macOS utility that classifies the current network as work or non-work and applies proxy, time server, printer and DNS settings once per change.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: MacOS X",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration",
    ],
)

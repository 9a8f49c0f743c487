"""
Setup file.
"""


from setuptools import find_packages, setup

KEYWORDS = "libsass sass makefile makemaker build generator plugins toolchain"



if __name__ == "__main__":
    setup(
        name="sassmake",
        version="0.1.0",
        description="Makefile targets for libsass, sassc and the libsass plugins",
        keywords=KEYWORDS,
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        python_requires=">=3.9",
        install_requires=[],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["sassmake=sassmake.cli:main"]},
        include_package_data=True)

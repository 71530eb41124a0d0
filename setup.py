import os
import setuptools

setuptools.setup(
    name="kconfparse",
    # MAJOR.MINOR.PATCH, per http://semver.org
    version="0.1.0",
    description="A Python parser for Kconfig 'source' statements, "
                "'config' blocks and expressions",
    long_description=
        open(os.path.join(os.path.dirname(__file__), "README.rst")).read(),
    author="The kconfparse developers",
    keywords="kconfig, kbuild, parser",
    license="ISC",
    py_modules=("kconfparse", "kconfcheck"),
    entry_points={
        "console_scripts": (
            "kconfcheck = kconfcheck:main",
        )
    },
    # super() without arguments
    python_requires=">=3.4",
    extras_require={
        "test": ("pytest",),
    },
    classifiers=(
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Software Development :: Compilers",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: POSIX",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy"))

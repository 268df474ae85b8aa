# setup.py
from setuptools import setup, find_packages

setup(
    name="lispflat",
    version="0.3.0",
    description="A small Scheme-flavoured Lisp interpreter with a language server",
    packages=find_packages(include=["lispflat", "lispflat.*", "lispflat_lsp", "lispflat_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lispflat=lispflat.__main__:main",
            "lispflat-ls=lispflat_lsp.server:main",
        ],
    },
    zip_safe=False,
)

# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="logrouter",
    version="1.0.0",
    description="Multi-sink log routing: console, durable session file and on-screen ring buffer",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["logrouter", "logrouter.*"]),
    python_requires=">=3.9",
    install_requires=[
        "customtkinter",  # On-screen log panel and demo window
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'logrouter=logrouter.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)

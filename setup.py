"""Install the DataAPI shared-session auth package."""

from setuptools import setup, find_packages

setup(
    name='dataapi-auth',
    version='1.0.0',
    packages=find_packages(exclude=['*test*']),
    python_requires='>=3.8',
    install_requires=[
        "flask>=2.2",
        "sqlalchemy>=1.4",
        "flask-sqlalchemy>=3.0"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    zip_safe=False
)

from setuptools import setup, find_packages

setup(
    name="trackii",
    version="0.1.0",
    packages=find_packages(include=["trackii", "trackii.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<4.1",
        "python-multipart",
        "redis",
        "openai",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "email-validator",
        "celery",
        "prometheus-client",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)

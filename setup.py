from setuptools import setup, find_namespace_packages

setup(
    name="profile-service",
    version="0.1.0",
    packages=find_namespace_packages(include=["profile_service", "profile_service.*"]),
    py_modules=["main"],
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
        "python-dotenv>=0.19.0",
        "python-multipart>=0.0.6",
        "PyMySQL>=1.0.0",
        "sqlalchemy>=2.0.0",
        "pydantic[email]>=2.0.0",
        "pydantic-settings>=2.0.0",
        "passlib[argon2]>=1.7.4",
        "python-jose[cryptography]>=3.3.0",
        "aiofiles>=23.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
        ],
    },
)

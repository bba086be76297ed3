from setuptools import setup, find_packages

setup(
    name="media_search",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pytest",
        "uvicorn",
        "fastapi",
        "pydantic>=2.0",
        "httpx>=0.27.0",
    ],
    python_requires='>=3.11',
)

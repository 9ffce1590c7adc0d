from setuptools import find_packages, setup

deps = [
    "boto3",
    "click",
    "click-aliases",
    "fastapi",
    "filetype",
    "minio>=7",
    "pillow>=9.1",
    "pydantic>=2",
    "pydantic-settings",
    "urllib3",
    "uvicorn",
]

setup(
    name="resizeio",
    version="0.1.0",
    script_name="setup.py",
    python_requires=">=3.8",
    zip_safe=False,
    install_requires=deps,
    extras_require={
        "test": ["pytest", "httpx"],
    },
    include_package_data=True,
    package_data={"resizeio": ["static/placeholders/*.svg"]},
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "resizeio=resizeio.cli:cli",
        ],
    },
)

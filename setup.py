import os

from setuptools import setup, find_packages

install_requires = [
    "graphql-core>=3.2,<3.3",
    "yarl>=1.6,<2.0",
    "anyio>=3.0,<5",
    "aiohttp>=3.11.2,<4",
    "multidict>=6.0,<7",
]

console_scripts = [
    "gql-upload-cli=gql_upload.cli:gql_upload_cli",
]

tests_requires = [
    "pytest==8.3.4",
    "pytest-asyncio==0.25.3",
    "pytest-cov==6.0.0",
    "aiofiles",
]

dev_requires = [
    "black==25.1.0",
    "flake8==7.1.2",
    "isort==6.0.1",
    "mypy==1.15",
    "types-aiofiles",
] + tests_requires

install_aiofiles_requires = [
    "aiofiles",
]

install_all_requires = install_aiofiles_requires

# Get version from __version__.py file
current_folder = os.path.abspath(os.path.dirname(__file__))
about = {}
with open(os.path.join(current_folder, "gql_upload", "__version__.py")) as f:
    exec(f.read(), about)

setup(
    name="gql-upload",
    version=about["__version__"],
    description="GraphQL file upload transport for Python",
    long_description=open(os.path.join(current_folder, "README.md")).read(),
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="api graphql upload multipart client",
    packages=find_packages(include=["gql_upload*"]),
    # PEP-561: https://www.python.org/dev/peps/pep-0561/
    package_data={"gql_upload": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require={
        "all": install_all_requires,
        "test": install_all_requires + tests_requires,
        "dev": install_all_requires + dev_requires,
        "aiofiles": install_aiofiles_requires,
    },
    include_package_data=True,
    zip_safe=False,
    platforms="any",
    entry_points={"console_scripts": console_scripts},
)

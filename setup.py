from setuptools import find_namespace_packages, setup

with open("README.rst", "r", encoding='utf-8') as fh:
    long_description = fh.read()

setup(
    name="arclet-docopt",
    version="0.1.0",
    author="RF-Tar-Railt",
    author_email="rf_tar_railt@qq.com",
    description="Command-line interface description language: the help text is the parser.",
    license='MIT',
    long_description=long_description,
    long_description_content_type="text/x-rst",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["arclet.docopt", "arclet.docopt.*"]),
    package_data={"arclet.docopt.i18n": ["*.json", ".config.json"]},
    install_requires=["tarina>=0.7.5", "typing-extensions>=4.5.0"],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'docopt-json = arclet.docopt.__main__:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    include_package_data=True,
    keywords=['command', 'docopt', 'cli', 'parsing', 'command-line', 'parser', 'usage'],
    python_requires='>=3.9',
)

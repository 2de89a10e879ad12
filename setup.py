#!/usr/bin/env python3

from setuptools import find_packages, setup

if __name__ == '__main__':
    setup(
        package_dir={'': 'src'},
        packages=find_packages(where='src', include=['threadpriority*']),
        package_data={'threadpriority': ['*.pyi']},
    )

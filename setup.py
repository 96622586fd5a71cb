from setuptools import setup, find_packages

setup(
    name='blendtext',
    version='0.1',

    description='Extract embedded text datablocks from Blender .blend files and rate their risk',
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type='text/markdown',

    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires='>=3.11',
    install_requires=[
        'zstandard>=0.20',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3.11',
        'Operating System :: OS Independent',
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Typing :: Typed',
    ],
)

# Always prefer setuptools over distutils
from setuptools import setup, find_packages

# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()


setup(
    name='otx',
    version='0.1.0',

    description='Fast approximate optimal transport distances between weighted point clouds.',
    long_description=long_description,
    long_description_content_type='text/markdown',

    python_requires='>=3.8',

    classifiers=[
        'Development Status :: 2 - Pre-Alpha',

        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Mathematics',

        'License :: OSI Approved :: MIT License',

        'Operating System :: POSIX :: Linux',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: Microsoft :: Windows',

        'Programming Language :: Python :: 3 :: Only',
    ],
    keywords='optimal transport sinkhorn wasserstein sliced entropic regularization',

    packages=find_packages(include=['otx', 'otx.*']),

    package_data={
        'otx': [
        ]
    },
    scripts=[],
    url='',
    license='MIT',
    install_requires=[
        'numpy',
        'scipy',
    ],

    extras_require={
        'full': ['torch'],
        'test': ['pytest', 'hypothesis', 'pytest-check', 'torch'],
    },
)

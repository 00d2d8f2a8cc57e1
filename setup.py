#!/usr/bin/env python

"""
Setup script for the Python package. Test dependencies are listed in the
'test' extra.
"""

from setuptools import find_packages, setup

PKG = 'gridion_audit'

all_packages = ['gridion_audit']
all_packages.extend('gridion_audit.' + p for p in sorted(find_packages('./gridion_audit')))

with open('README.md', encoding='utf-8') as f:
    readme = f.read()


setup(
    name='gridion-audit',
    # This tag is automatically updated by bump2version
    version='1.0.0',
    description='Audit GridION run directories against their archived copies',
    long_description=readme,
    long_description_content_type='text/markdown',
    license='MIT',
    packages=all_packages,
    python_requires='>=3.10',
    install_requires=[
        'click',
        'cpg-utils >= 4.9.4',
        'google-cloud-storage',
        'google-api-core',
        'google-auth',
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gridion-run-audit = gridion_audit.cli.run_audit:main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords='bioinformatics',
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: POSIX',
        'Operating System :: Unix',
        'Programming Language :: Python',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ],
)

#!/usr/bin/env python
import codecs
import os
import sys

from setuptools import find_packages, setup


if 'publish' in sys.argv:
    os.system('python3 -m build')
    os.system('python3 -m twine upload --repository django_resampled dist/*')
    sys.exit()


def read(filepath):
    with codecs.open(filepath, 'r', 'utf-8') as f:
        return f.read()


def exec_file(filepath, globalz=None, localz=None):
    exec(read(filepath), globalz, localz)


# Load package meta from the pkgmeta module without loading resampled.
pkgmeta = {}
exec_file(
    os.path.join(os.path.dirname(__file__), 'resampled', 'pkgmeta.py'),
    pkgmeta
)


setup(
    name='django-resampled',
    version=pkgmeta['__version__'],
    description='Resized, cropped and padded image variants, generated on'
                ' demand and cached on Django storage.',
    long_description=read(os.path.join(os.path.dirname(__file__), 'README.rst')),
    author='Matthew Tretter',
    author_email='m@tthewwithanm.com',
    maintainer='Venelin Stoykov',
    maintainer_email='venelin.stoykov@industria.tech',
    license='BSD',
    packages=find_packages(exclude=['*.tests', '*.tests.*', 'tests.*', 'tests']),
    zip_safe=False,
    include_package_data=True,
    install_requires=[
        'Django>=4.2',
        'django-appconf',
        'pilkit',
        'Pillow',
    ],
    extras_require={
        'tests': [
            'beautifulsoup4',
            'pytest',
            'pytest-django',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Web Environment',
        'Framework :: Django',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Utilities'
    ],
)

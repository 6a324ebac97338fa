# -*- coding: utf-8 -*-

from setuptools import setup

# Hmmmph.
# So we get all the meta-information in one place (yay!) but we call
# exec to get it (boo!). Note that we can't "from cypherpunk._metadata
# import *" here because that won't work when setup is being run by
# pip (outside of Git checkout etc)
with open('cypherpunk/_metadata.py') as f:
    exec(
        compile(f.read(), '_metadata.py', 'exec'),
        globals(),
        locals(),
    )

description = '''
    Cypherpunk remailer chain composer
'''

setup(
    name='cypherpunk',
    version=__version__,
    description=description,
    long_description=open('README.rst', 'r').read(),
    keywords=['python', 'remailer', 'pgp', 'anonymity'],
    install_requires=open('requirements.txt').readlines(),
    # "pip install -e .[dev]" will install development requirements
    extras_require=dict(
        dev=open('dev-requirements.txt').readlines(),
    ),
    classifiers=[
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
        'Topic :: Communications :: Email',
        'Topic :: Security :: Cryptography',
        'Programming Language :: Python :: 3',
    ],
    author=__author__,
    author_email=__contact__,
    url=__url__,
    license=__license__,
    python_requires='>=3.6',
    packages=["cypherpunk"],
)

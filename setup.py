from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name             = 'pyCRC8',
    packages         = ['pyCRC8'],
    version          = '1.0.0',
    description      = 'CRC-8 with a configurable polynomial: bitwise and table-driven engines in normal and reflected conventions, plus a CRC checked serial link',
    long_description = long_description,
    long_description_content_type = "text/markdown",
    keywords         = ['CRC', 'CRC-8', 'checksum', 'serial'],
    classifiers      = [],
    install_requires = ['pyserial'],
    extras_require   = {'test': ['pytest']},
    entry_points     = {'console_scripts': ['pycrc8-bench = pyCRC8.benchmark:main']}
)

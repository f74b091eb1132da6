from setuptools import setup
import sys

sys.path.append('lib')
import configh

setup(
    name='configh',
    version=configh.__version__,
    description='generate config.h by probing the C compiler',
    license='MIT',
    packages=[
        'configh',
    ],
    install_requires=[
        'PyYAML',
    ],
    entry_points={
        'console_scripts': ['configh = configh.main:main']
    },
    package_dir={'': 'lib'},
    zip_safe=False,
)

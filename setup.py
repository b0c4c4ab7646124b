from setuptools import setup
from setuptools import find_packages

config = {
    'name' : 'centroidal',
    'version' : '0.1.0',
    'description' : 'Centroidal dynamics of articulated rigid body systems',
    'install_requires' : [
        'numpy',
        'scipy',
        'urdf_parser_py',
        'rich'
    ],
    'extras_require' : {
        'test' : ['pytest'],
    },
    'python_requires' : '>=3.8',
    'package_dir' : {'': 'src'},
    'packages' : find_packages('src'),
}

setup(**config)

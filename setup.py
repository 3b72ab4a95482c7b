from setuptools import setup, find_packages

config = {
    'description': 'coreprobe - Host core and processor counts',
    'long_description': 'Reports the number of physical cores and logical '
                        'processors on a host using platform specific probes.',
    'author': 'DOE',
    'version': '1.0.0',
    'package_dir': {'': 'lib'},
    'packages': find_packages('lib'),
    'python_requires': '>=3.6',
    'install_requires': [
        'yapsy',
        'PyYAML',
        'pydantic>=2',
    ],
    'extras_require': {
        'test': ['pytest'],
    },
    'entry_points': {
        'console_scripts': [
            'coreprobe = coreprobe.main:main',
        ],
    },
    'name': 'coreprobe'
}

setup(**config)

import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements():
    with open(os.path.join(own_dir, 'requirements.txt')) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            yield line


def modules():
    return [
        'ctx',
        'logutil',
        'util',
        'version',
    ]


def packages():
    return setuptools.find_packages(exclude=['test', 'test.*'])


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='release-notes-range',
    version=version(),
    description='Show GitHub release notes for ranges of semver versions',
    python_requires='>=3.11',
    py_modules=modules(),
    packages=packages(),
    package_data={
        '': ['VERSION'],
    },
    install_requires=list(requirements()),
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'release-notes-range = release_notes.cli:main',
        ],
    },
)

from setuptools import setup, find_packages

setup(
    name='whenmock',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    version='0.3.0',
    description='Argument-sensitive return values for unittest.mock objects',
    author='Jonas Holmer',
    author_email='jonas.holmer@gmail.com',
    keywords=['testing', 'mock', 'stub', 'unit-testing', 'matchers'],
    classifiers=['Development Status :: 3 - Alpha',
                 'Intended Audience :: Developers',
                 'Framework :: Pytest',
                 'Topic :: Software Development :: Testing',
                 'Topic :: Software Development :: Testing :: Mocking',
                 'Programming Language :: Python :: 3'],
    python_requires='>=3.10',
    install_requires=['rich', 'blinker'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "pytest11": ['whenmock = whenmock.pytest_plugin']
    }
)

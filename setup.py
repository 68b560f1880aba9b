from setuptools import setup, find_packages

setup(
    name='hashdeck',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'click',
        'rich',
        'pyyaml',
        'markdown',
        'beautifulsoup4',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'hashdeck=hashdeck.cli:main',
        ],
    },
    description='Content-addressed flashcards from plain-text deck files',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.11',
)

from setuptools import setup, find_packages
setup(
    name='firestore-fetch',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'firestore_fetch': [
            'config/*.ini',
        ],
    },
    description='Fetch documents from a Firestore collection with anonymous or password sign-in.',
    python_requires='>=3.9',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'PyJWT>=2.0.0',
        'requests>=2.25.0',
        'urllib3>=1.26',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'firestore-fetch = firestore_fetch.cli:main',
        ],
    },
)

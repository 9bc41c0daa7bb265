from setuptools import setup, find_packages

setup(
    name='http-problem-mapper',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    include_package_data=True,
    description='Map exceptions and empty error responses to application/problem+json documents.',
    install_requires=[
        'fastapi>=0.110',
        'starlette>=0.36',
        'pydantic>=2.0',
        'prometheus-client>=0.17',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
            'anyio>=3.7',
            'httpx>=0.24',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
    zip_safe=False,
)

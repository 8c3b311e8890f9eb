from setuptools import setup, find_packages

setup(
    name='bvh_browser',
    version='0.1.0',
    packages=find_packages(include=['bvh_browser', 'bvh_browser.*']),
    python_requires='>=3.9',
    install_requires=[
        'numpy',
        'scipy>=1.14',
    ],
    extras_require={
        'test': ['pytest'],
    },
)

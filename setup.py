import os

from setuptools import setup

readme_path = os.path.join(os.path.dirname(
    os.path.abspath(__file__)),
    'README.md',
)
long_description = open(readme_path).read()

setup(
    name='lzoned',
    version='0.1.0',
    packages=['lzoned', 'lzoned.cli'],
    description="Lazily fetched, lazily flushed zones of state for "
                "arbitrary host objects",
    long_description=long_description,
    long_description_content_type='text/markdown',
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Intended Audience :: Developers',
        'Programming Language :: Python',
        'License :: OSI Approved :: MIT License',
    ],
    install_requires=[
        'justbackoff',
    ],
    extras_require={
        'cli': ['click'],
        'test': ['pytest', 'click'],
    },
    entry_points={
        'console_scripts': ['lzoned-cli=lzoned.cli.__main__:cli'],
    },
    setup_requires=[],
)

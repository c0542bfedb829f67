import os

import setuptools


def read(fname):
   return open(os.path.join(os.path.dirname(__file__), fname)).read()


about = {}
exec(read("wav_mixer/version.py"), about)

setuptools.setup(
   name='wav-mixer',
   version=about["__version__"],
   description='Streaming mixer for time-aligned integer PCM WAV files',
   long_description=read('README.md'),
   long_description_content_type="text/markdown",
   license="BSD2",
   keywords="wav mixer pcm audio",
   packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
   install_requires=[
      'numpy',
      'soundfile',
   ],
   extras_require={
      'test': ['pytest'],
   },
   entry_points={
      'console_scripts': [
         'wav-mixer=wav_mixer.cli:main',
      ],
   },
   classifiers=[
      "Programming Language :: Python",
      "Programming Language :: Python :: 3",
      "Operating System :: OS Independent",
    ],
   python_requires='>=3.10',
)

import os
import re
from setuptools import setup


def findPackages(moduleName):
    # implement a simple findPackages so we don't have to depend on
    # setuptools' discovery rules
    packages = []
    for directory, subdirectories, files in os.walk(moduleName):
        if '__init__.py' in files:
            packages.append(directory.replace(os.sep, '.'))
    return [package for package in packages
            if ('testing' not in package and 'test' not in package)]


def parseRequirements(filename):
    requirements = []
    with open(filename, 'r') as requirementsFile:
        for line in requirementsFile.read().split('\n'):
            if re.match(r'(\s*#)|(\s*$)', line):
                continue
            requirements.append(line.strip())
    return requirements


setup(name='socialdb',
      version='0.1',
      description='SocialDB',
      author='SocialDB developers',
      packages=findPackages('socialdb'),
      classifiers=[
          'Development Status :: 4 - Beta',
          'License :: OSI Approved :: Apache Software License',
          'Operating System :: POSIX',
          'Programming Language :: Python :: 3',
          'Topic :: Database :: Front-Ends',
      ],
      python_requires='>=3.8',
      install_requires=parseRequirements('requirements.txt'),
      extras_require={'test': parseRequirements('requirements-test.txt')})

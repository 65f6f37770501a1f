from setuptools import setup, find_packages
import os

__location__ = os.path.realpath(os.path.join(os.getcwd(), os.path.dirname(__file__)))


def read_requirements():
    # parses requirements from requirements.txt
    reqs_path = os.path.join(__location__, 'requirements.txt')
    with open(reqs_path, encoding='utf8') as f:
        reqs = [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return reqs

setup(name='corefeval',
      version='0.1.0',
      description='Coreference annotation evaluation with the CoNLL-2012 reference scorer',
      license='Apache License, Version 2.0',
      packages=find_packages(exclude=('data', 'docs', 'downloads', 'logs', 'tests')),
      include_package_data=True,
      python_requires='>=3.6',
      install_requires=read_requirements(),
      extras_require={'test': ['pytest']},
      entry_points={'console_scripts': ['corefeval-score=corefeval.evaluate:main']},
      keywords=['NLP',
                'natural language processing',
                'coreference resolution',
                'CoNLL-2012',
                'evaluation'],
      )

# Copyright 2017 Neural Networks and Deep Learning lab, MIPT
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse


def str2bool(value):
    if value.lower() in ('yes', 'true', 't', '1', 'y'):
        return True
    elif value.lower() in ('no', 'false', 'f', '0', 'n'):
        return False
    raise argparse.ArgumentTypeError('Boolean value expected.')


def add_cmdline_args(parser):
    """
    Add parameters from command line.
    Args:
        parser: parameters parser

    Returns:
        nothing
    """
    evaluator = parser.add_argument_group('Reference Evaluator Arguments')

    # Strategy and temporary files.
    evaluator.add_argument('--single_file', type=str2bool, default=True,
                           help='put all documents in one file for reference-coreference-scorers')
    evaluator.add_argument('--remove_tmp_files', type=str2bool, default=True,
                           help='temporarily generated files will get removed after execution')
    evaluator.add_argument('--scorer_n_threads', type=int, default=-1,
                           help='how many scorer processes can run at once if not single_file, -1 for all cpus')

    # Scorer location.
    evaluator.add_argument('--scorer_path', type=str, default='lib/reference-coreference-scorers/scorer.pl',
                           help='path to scorer.pl of reference-coreference-scorers v8.01')
    evaluator.add_argument('--scorer_interpreter', type=str, default='perl',
                           help='program running the scorer, empty to execute scorer_path directly')
    evaluator.add_argument('--scorer_cwd', type=str, default=None,
                           help='working directory of the scorer')


def default_options():
    """Returns opt dict with the default value of every evaluator parameter"""
    parser = argparse.ArgumentParser(add_help=False)
    add_cmdline_args(parser)
    return vars(parser.parse_args([]))
